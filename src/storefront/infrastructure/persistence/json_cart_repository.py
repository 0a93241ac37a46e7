"""JSON-file-backed implementation of CartRepository.

Only the items are stored; totals are recomputed on every read.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- CartRepository interface ---------------------------------------------

    def get_by_session_id(self, session_id: str) -> Cart | None:
        for raw in self._load_raw():
            if raw["session_id"] == session_id:
                return self._to_domain(raw)
        return None

    def save(self, cart: Cart) -> None:
        records = self._load_raw()
        for i, raw in enumerate(records):
            if raw["session_id"] == cart.session_id:
                records[i] = self._to_raw(cart)
                break
        else:
            records.append(self._to_raw(cart))
        self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "session_id": cart.session_id,
            "created_at": cart.created_at.isoformat(),
            "updated_at": cart.updated_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                    "quantity": item.quantity.value,
                    "added_at": item.added_at.isoformat(),
                }
                for item in cart.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        items = [
            CartItem(
                product_id=item["product_id"],
                product_name=item["product_name"],
                unit_price=Money(Decimal(item["unit_price"]), item.get("currency", "USD")),
                quantity=Quantity(item["quantity"]),
                added_at=datetime.fromisoformat(item["added_at"]),
            )
            for item in raw.get("items", [])
        ]
        return Cart(
            session_id=raw["session_id"],
            items=items,
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
