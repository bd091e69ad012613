"""
Tool Core - License System.

============================================================
RESPONSIBILITY
============================================================
File-backed license subsystem.

- Validates the stored license (EULA, activation key)
- Activates with a key once the license agreement is confirmed
- Deactivates by dropping the stored key

Every request completes asynchronously: the outcome is posted
on the event bus, never returned.

============================================================
EVENTS
============================================================
initialize()          -> LICENSE_SUCCESS | LICENSE_EULA_REQUIRED
                         | LICENSE_ACTIVATION_REQUIRED | LICENSE_ERROR
request_activation()  -> LICENSE_ACTIVATION_SUCCESS | LICENSE_ACTIVATION_ERROR
request_deactivation()-> LICENSE_DEACTIVATION_SUCCESS | LICENSE_DEACTIVATION_ERROR

============================================================
"""

import asyncio
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Awaitable, Optional, Set

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from core.exceptions import LicenseError

from .events import EventBus, EventKind


logger = logging.getLogger(__name__)

KEY_PATTERN = re.compile(r"^ATOMIC-[0-9A-Z]{4}-[0-9A-Z]{4}-[0-9A-Z]{4}-[0-9A-Z]{4}$")


def normalize_key(key: str) -> str:
    return key.strip().upper()


def mask_key(key: str) -> str:
    """Hide all but the last group of a key for logging."""
    return "ATOMIC-****-****-****-" + key[-4:]


# =======================
# LICENSE RECORD
# =======================

class LicenseRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    eula_accepted: bool = False
    key: Optional[str] = None
    activated_at: Optional[datetime] = None

    @field_validator("key")
    @classmethod
    def check_key(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = normalize_key(value)
        if not KEY_PATTERN.match(value):
            raise ValueError("malformed activation key")
        return value


# =======================
# LICENSE SYSTEM
# =======================

class LicenseSystem:
    """License validation, activation and deactivation."""

    def __init__(self, bus: EventBus, license_path: Path):
        self._bus = bus
        self._license_path = Path(license_path)
        self._eula_confirmed = False
        self._tasks: Set[asyncio.Task] = set()

    @property
    def license_path(self) -> Path:
        return self._license_path

    @property
    def eula_confirmed(self) -> bool:
        return self._eula_confirmed

    # --------------------------------------------------------
    # Requests
    # --------------------------------------------------------

    def initialize(self) -> None:
        """Start license validation."""
        logger.debug(f"License validation requested | path={self._license_path}")
        self._schedule(self._validate(), EventKind.LICENSE_ERROR)

    def license_agreement_confirmed(self) -> None:
        self._eula_confirmed = True

    def request_activation(self, key: str) -> None:
        logger.debug("License activation requested")
        self._schedule(self._activate(key), EventKind.LICENSE_ACTIVATION_ERROR)

    def request_deactivation(self) -> None:
        logger.debug("License deactivation requested")
        self._schedule(self._deactivate(), EventKind.LICENSE_DEACTIVATION_ERROR)

    def _schedule(self, coro: Awaitable[None], error_kind: EventKind) -> None:
        """Run coro as a task; a task that dies still answers with error_kind."""
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)

        def on_done(done: asyncio.Task) -> None:
            self._tasks.discard(done)
            if done.cancelled() or done.exception() is None:
                return
            error = done.exception()
            logger.error(f"License request failed | error={type(error).__name__}: {error}", exc_info=error)
            self._bus.post(error_kind, message=f"License request failed: {error}")

        task.add_done_callback(on_done)

    # --------------------------------------------------------
    # Flows
    # --------------------------------------------------------

    async def _validate(self) -> None:
        try:
            record = await asyncio.to_thread(self._read_record)
        except LicenseError as e:
            logger.warning(e.to_log_format())
            self._bus.post(EventKind.LICENSE_ERROR, message=e.message)
            return

        if record is None or not record.eula_accepted:
            self._bus.post(EventKind.LICENSE_EULA_REQUIRED)
        elif not record.key:
            self._bus.post(EventKind.LICENSE_ACTIVATION_REQUIRED)
        else:
            logger.info(f"License valid | key={mask_key(record.key)}")
            self._bus.post(EventKind.LICENSE_SUCCESS)

    async def _activate(self, key: str) -> None:
        if not self._eula_confirmed:
            self._bus.post(EventKind.LICENSE_ACTIVATION_ERROR, message="License agreement not confirmed")
            return

        normalized = normalize_key(key)
        if not KEY_PATTERN.match(normalized):
            self._bus.post(
                EventKind.LICENSE_ACTIVATION_ERROR,
                message=f"Invalid activation key: {key}",
            )
            return

        record = LicenseRecord(
            eula_accepted=True,
            key=normalized,
            activated_at=datetime.now(timezone.utc),
        )
        try:
            await asyncio.to_thread(self._write_record, record)
        except LicenseError as e:
            self._bus.post(EventKind.LICENSE_ACTIVATION_ERROR, message=e.message)
            return

        logger.info(f"License activated | key={mask_key(normalized)}")
        self._bus.post(EventKind.LICENSE_ACTIVATION_SUCCESS)

    async def _deactivate(self) -> None:
        try:
            record = await asyncio.to_thread(self._read_record)
            if record is None or not record.key:
                raise LicenseError("No active license to deactivate")
            await asyncio.to_thread(
                self._write_record,
                LicenseRecord(eula_accepted=record.eula_accepted),
            )
        except LicenseError as e:
            self._bus.post(EventKind.LICENSE_DEACTIVATION_ERROR, message=e.message)
            return

        logger.info("License deactivated")
        self._bus.post(EventKind.LICENSE_DEACTIVATION_SUCCESS)

    # --------------------------------------------------------
    # Storage
    # --------------------------------------------------------

    def _read_record(self) -> Optional[LicenseRecord]:
        if not self._license_path.exists():
            return None
        try:
            return LicenseRecord.model_validate_json(self._license_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            raise LicenseError(
                f"License file is invalid: {self._license_path}",
                context={"path": str(self._license_path)},
                cause=e,
            ) from e

    def _write_record(self, record: LicenseRecord) -> None:
        try:
            self._license_path.parent.mkdir(parents=True, exist_ok=True)
            self._license_path.write_text(record.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            raise LicenseError(
                f"Unable to write license file: {self._license_path}",
                context={"path": str(self._license_path)},
                cause=e,
            ) from e


__all__ = ["LicenseRecord", "LicenseSystem", "KEY_PATTERN", "mask_key"]
