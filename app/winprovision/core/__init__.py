"""Core provisioning logic: tracking, resolution, removal, fonts, and phases."""
