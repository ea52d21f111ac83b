"""
Console screens.

Each screen owns its in-memory state and exposes async handlers that
never raise; outcomes are reported through the shared ToastQueue.
"""

from kiosk_admin.screens.account import AccountScreen
from kiosk_admin.screens.auth import AuthScreen
from kiosk_admin.screens.base import BaseScreen
from kiosk_admin.screens.categories import CategoriesScreen
from kiosk_admin.screens.dashboard import DashboardScreen
from kiosk_admin.screens.menus import MenusScreen
from kiosk_admin.screens.orders import OrdersScreen, format_order_time

__all__ = [
    "AccountScreen",
    "AuthScreen",
    "BaseScreen",
    "CategoriesScreen",
    "DashboardScreen",
    "MenusScreen",
    "OrdersScreen",
    "format_order_time",
]
