from .api import WazuhAPIError, authenticate, fetch_syscheck_items

__all__ = ["WazuhAPIError", "authenticate", "fetch_syscheck_items"]
