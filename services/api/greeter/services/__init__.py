"""Services: startup bootstrap and the greeting read/reset logic."""
