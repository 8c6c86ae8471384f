"""Services package - long-lived objects owning config, db handles and request state."""
