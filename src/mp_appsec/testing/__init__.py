"""Testing: in-memory fakes for host-supplied ports."""
