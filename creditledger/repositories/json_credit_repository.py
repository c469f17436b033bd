from __future__ import annotations

import json
import logging
import datetime as dt
from decimal import Decimal
from pathlib import Path
from typing import Sequence
from uuid import UUID

from creditledger.domain.credit import Credit, CreditStatus, Payment, PaymentMethod
from creditledger.domain.money import _parse_decimal
from creditledger.repositories.credit_repository import CreditRepository

logger = logging.getLogger(__name__)


class JsonCreditRepository(CreditRepository):
    """
    Fichier credits.json :
    {"version": 1, "credits": [{..., "payments": [...]}, ...]}
    Lecture stricte, écriture atomique (tmp + replace).
    """

    def __init__(self, *, credits_path: Path) -> None:
        self._path = credits_path

    def load(self) -> list[Credit]:
        if not self._path.exists():
            # pas encore de fichier = ledger vide
            return []

        payload = self._read_file()
        out: list[Credit] = []
        seen: set[UUID] = set()

        for i, rec in enumerate(payload["credits"]):
            ctx = f"credits[{i}]"
            if not isinstance(rec, dict):
                raise ValueError(f"credits.json: {ctx} must be an object")

            credit = self._to_credit(rec, ctx=ctx)
            if credit.id in seen:
                raise ValueError(f"credits.json: duplicate credit id '{credit.id}'")
            seen.add(credit.id)
            out.append(credit)

        return out

    def save(self, credits: Sequence[Credit]) -> None:
        payload = {"version": 1, "credits": [self._to_record(c) for c in credits]}
        self._write(payload)
        logger.debug("credits.json written (%d credit(s)) at %s", len(credits), self._path)

    # ---------- internals ----------
    def _read_file(self) -> dict:
        raw = self._path.read_text(encoding="utf-8")
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"credits.json: invalid JSON ({e})") from e

        if not isinstance(payload, dict):
            raise ValueError("credits.json: root must be an object")
        if payload.get("version") != 1:
            raise ValueError("credits.json: version must be 1")
        if "credits" not in payload or not isinstance(payload["credits"], list):
            raise ValueError("credits.json: 'credits' must be a list")

        return payload

    def _write(self, payload: dict) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
        tmp.replace(self._path)

    def _to_credit(self, rec: dict, *, ctx: str) -> Credit:
        payments_raw = rec.get("payments", [])
        if not isinstance(payments_raw, list):
            raise ValueError(f"credits.json: {ctx}.payments must be a list")

        payments = []
        for j, p in enumerate(payments_raw):
            pctx = f"{ctx}.payments[{j}]"
            if not isinstance(p, dict):
                raise ValueError(f"credits.json: {pctx} must be an object")
            payments.append(self._to_payment(p, ctx=pctx))

        status_str = self._req_str(rec, "status", ctx=ctx)
        try:
            status = CreditStatus(status_str)
        except ValueError:
            raise ValueError(f"credits.json: {ctx}.status invalid (got '{status_str}')")

        try:
            return Credit(
                id=self._parse_uuid(self._req_str(rec, "id", ctx=ctx), ctx=f"{ctx}.id"),
                client_name=self._req_str(rec, "client_name", ctx=ctx),
                client_last_name=self._req_str(rec, "client_last_name", ctx=ctx),
                id_number=self._req_str(rec, "id_number", ctx=ctx),
                phone=self._req_str(rec, "phone", ctx=ctx),
                address=self._req_str(rec, "address", ctx=ctx),
                total_amount=self._parse_amount(self._req_str(rec, "total_amount", ctx=ctx), ctx=f"{ctx}.total_amount"),
                detailed_info=self._opt_str(rec, "detailed_info", ctx=ctx),
                date=self._parse_date(self._req_str(rec, "date", ctx=ctx), ctx=f"{ctx}.date"),
                status=status,
                payments=tuple(payments),
            )
        except ValueError as e:
            if str(e).startswith("credits.json"):
                raise
            raise ValueError(f"credits.json: {ctx} invalid ({e})") from e

    def _to_payment(self, rec: dict, *, ctx: str) -> Payment:
        method_str = self._req_str(rec, "payment_method", ctx=ctx)
        try:
            method = PaymentMethod(method_str)
        except ValueError:
            raise ValueError(f"credits.json: {ctx}.payment_method invalid (got '{method_str}')")

        recorded_str = self._req_str(rec, "recorded_at", ctx=ctx)
        try:
            recorded_at = dt.datetime.fromisoformat(recorded_str)
        except ValueError as e:
            raise ValueError(f"credits.json: {ctx}.recorded_at must be an ISO datetime") from e

        try:
            return Payment.create(
                id=self._parse_uuid(self._req_str(rec, "id", ctx=ctx), ctx=f"{ctx}.id"),
                amount=self._parse_amount(self._req_str(rec, "amount", ctx=ctx), ctx=f"{ctx}.amount"),
                date=self._parse_date(self._req_str(rec, "date", ctx=ctx), ctx=f"{ctx}.date"),
                payment_method=method,
                notes=self._opt_str(rec, "notes", ctx=ctx),
                recorded_at=recorded_at,
            )
        except ValueError as e:
            if str(e).startswith("credits.json"):
                raise
            raise ValueError(f"credits.json: {ctx} invalid ({e})") from e

    @staticmethod
    def _req_str(obj: dict, key: str, *, ctx: str) -> str:
        if key not in obj:
            raise ValueError(f"credits.json: {ctx} missing field '{key}'")
        val = obj[key]
        if not isinstance(val, str):
            raise ValueError(f"credits.json: {ctx}.{key} must be a string")
        return val

    @staticmethod
    def _opt_str(obj: dict, key: str, *, ctx: str) -> str | None:
        val = obj.get(key)
        if val is None:
            return None
        if not isinstance(val, str):
            raise ValueError(f"credits.json: {ctx}.{key} must be a string or null")
        return val

    @staticmethod
    def _parse_date(value: str, *, ctx: str) -> dt.date:
        try:
            return dt.date.fromisoformat(value)
        except ValueError as e:
            raise ValueError(f"credits.json: {ctx} must be ISO date YYYY-MM-DD") from e

    @staticmethod
    def _parse_uuid(value: str, *, ctx: str) -> UUID:
        try:
            return UUID(value)
        except ValueError as e:
            raise ValueError(f"credits.json: {ctx} must be a UUID") from e

    @staticmethod
    def _parse_amount(value: str, *, ctx: str) -> Decimal:
        try:
            return _parse_decimal(value)
        except ValueError as e:
            raise ValueError(f"credits.json: {ctx} invalid amount") from e

    @staticmethod
    def _to_record(c: Credit) -> dict:
        return {
            "id": str(c.id),
            "client_name": c.client_name,
            "client_last_name": c.client_last_name,
            "id_number": c.id_number,
            "phone": c.phone,
            "address": c.address,
            "total_amount": str(c.total_amount),
            "detailed_info": c.detailed_info,
            "date": c.date.isoformat(),
            "status": c.status.value,
            "payments": [
                {
                    "id": str(p.id),
                    "amount": str(p.amount),
                    "date": p.date.isoformat(),
                    "payment_method": p.payment_method.value,
                    "notes": p.notes,
                    "recorded_at": p.recorded_at.isoformat(),
                }
                for p in c.payments
            ],
        }
