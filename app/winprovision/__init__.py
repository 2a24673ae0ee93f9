"""winprovision - Declarative post-installation provisioning for Windows."""

__version__ = "0.1.0"
