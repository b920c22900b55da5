APP_NAME = "SafeSwap"
__version__ = "1.0.0"
