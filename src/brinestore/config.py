"""Store configuration.

A :class:`StoreConfig` captures the whole external configuration surface
of a store (file, format, dump policy) so it can come from a settings
file, a mapping or the environment and be validated in one place.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from brinestore.policy import DumpPolicy
from brinestore.serialization import SerializationMethod
from brinestore.store import BrineStore

DumpPolicyName = Literal["never", "auto", "upon_request", "periodic"]

_ENV_FIELDS = ("path", "serialization", "dump_policy", "dump_interval")


class StoreConfig(BaseModel):
    """Validated settings for opening a :class:`BrineStore`.

    Attributes:
        path: Database file.
        serialization: On-disk format (``"json"``, ``"bin"``, ``"yaml"``, ``"cbor"``).
        dump_policy: ``"never"``, ``"auto"``, ``"upon_request"`` or ``"periodic"``.
        dump_interval: Seconds between periodic dumps.  Required for
            ``"periodic"`` and rejected otherwise.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    serialization: SerializationMethod = SerializationMethod.JSON
    dump_policy: DumpPolicyName = "auto"
    dump_interval: float | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _check_interval(self) -> StoreConfig:
        if self.dump_policy == "periodic" and self.dump_interval is None:
            raise ValueError("dump_interval is required for the periodic dump policy")
        if self.dump_policy != "periodic" and self.dump_interval is not None:
            raise ValueError("dump_interval only applies to the periodic dump policy")
        return self

    @classmethod
    def from_env(
        cls,
        prefix: str = "BRINESTORE_",
        environ: Mapping[str, str] | None = None,
    ) -> StoreConfig:
        """Build a config from ``<prefix>PATH``, ``<prefix>SERIALIZATION``,
        ``<prefix>DUMP_POLICY`` and ``<prefix>DUMP_INTERVAL``.

        Unset variables fall back to the field defaults.
        """
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for field in _ENV_FIELDS:
            raw = env.get(f"{prefix}{field.upper()}")
            if raw:
                values[field] = raw
        return cls.model_validate(values)

    def to_policy(self) -> DumpPolicy:
        if self.dump_policy == "never":
            return DumpPolicy.never()
        if self.dump_policy == "upon_request":
            return DumpPolicy.upon_request()
        if self.dump_policy == "periodic":
            if self.dump_interval is None:
                raise ValueError("dump_interval is required for the periodic policy")
            return DumpPolicy.periodic(self.dump_interval)
        return DumpPolicy.auto()


def open_store(config: StoreConfig) -> BrineStore:
    """Load the configured file if it exists, otherwise start an empty store."""
    if os.path.exists(config.path):
        return BrineStore.load(config.path, config.to_policy(), config.serialization)
    return BrineStore.new(config.path, config.to_policy(), config.serialization)
