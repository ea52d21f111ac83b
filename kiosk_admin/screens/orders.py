"""
Orders screen.

Shows every table's kiosk with its outstanding orders. Clearing a table
and deactivating a kiosk update the local list right away, then always
re-fetch from the backend, so a failed call is corrected by the reload.
"""

import logging
from datetime import datetime
from typing import Optional

from kiosk_admin.schemas import Kiosk
from kiosk_admin.screens.base import BaseScreen

logger = logging.getLogger(__name__)

DEFAULT_TABLE_COUNT = 16


def format_order_time(created_at: datetime) -> str:
    """Korean display form, e.g. "2025년 1월 15일 오후 06:30", in local time."""
    if created_at.tzinfo is not None:
        created_at = created_at.astimezone()
    meridiem = "오전" if created_at.hour < 12 else "오후"
    hour = created_at.hour % 12 or 12
    return (
        f"{created_at.year}년 {created_at.month}월 {created_at.day}일 "
        f"{meridiem} {hour:02d}:{created_at.minute:02d}"
    )


class OrdersScreen(BaseScreen):
    name = "orders"

    def __init__(self, backend, toasts, gate=None):
        super().__init__(backend, toasts, gate)
        self.kiosks: list[Kiosk] = []
        self.table_count = DEFAULT_TABLE_COUNT
        self.refreshing = False
        self.submitting = False

    async def load(self) -> None:
        self.refreshing = True
        try:
            kiosks = await self.backend.list_kiosk_orders()
        except Exception as e:
            self.report_failure("order fetch", e, "Failed to load order data", show_detail=False)
            return
        finally:
            self.refreshing = False

        self.table_count = len(kiosks)
        self.kiosks = kiosks

    def kiosk_for_table(self, number: int) -> Optional[Kiosk]:
        return next((k for k in self.kiosks if k.number == number), None)

    def _patch(self, predicate, **changes) -> None:
        self.kiosks = [
            k.model_copy(update=changes) if predicate(k) else k
            for k in self.kiosks
        ]

    def request_clear_orders(self, kiosk_number: int) -> None:
        async def clear_orders() -> None:
            self.submitting = True
            try:
                self._patch(lambda k: k.number == kiosk_number, orders=[])
                await self.backend.clear_kiosk_orders(kiosk_number)
                self.toasts.success("Orders cleared")
            except Exception as e:
                self.report_failure("order clear", e, "Failed to clear orders", show_detail=False)
            finally:
                await self.load()
                self.submitting = False

        self.gate.open("Clear all orders for this table?", clear_orders)

    def request_deactivate(self, kiosk_id: int) -> None:
        async def deactivate() -> None:
            self.submitting = True
            try:
                self._patch(lambda k: k.kiosk_id == kiosk_id, is_active=False)
                await self.backend.deactivate_kiosk(kiosk_id)
                self.toasts.success("Table deactivated")
            except Exception as e:
                self.report_failure("kiosk deactivation", e, "Failed to deactivate table", show_detail=False)
            finally:
                await self.load()
                self.submitting = False

        self.gate.open("Deactivate this kiosk?", deactivate)

    def snapshot(self) -> dict:
        tables = []
        for number in range(1, self.table_count + 1):
            kiosk = self.kiosk_for_table(number)
            if kiosk is None:
                tables.append({"kioskNumber": number, "kiosk": None})
                continue
            tables.append({
                "kioskNumber": number,
                "kioskId": kiosk.kiosk_id,
                "kioskIsActive": kiosk.is_active,
                "totalPrice": kiosk.total_price,
                "orders": [
                    {
                        "orderId": order.order_id,
                        "createdAt": format_order_time(order.created_at),
                        "totalPrice": order.total_price,
                        "items": [item.model_dump(by_alias=True) for item in order.items],
                    }
                    for order in kiosk.orders
                ],
            })
        return {
            "table_count": self.table_count,
            "refreshing": self.refreshing,
            "submitting": self.submitting,
            "tables": tables,
        }
