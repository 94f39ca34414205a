"""Genesis files, keystore wallets, connector configs and compose services, and option validation for local FireFly stacks."""

__version__ = "0.1.0"
__all__ = ["__version__"]