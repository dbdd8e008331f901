"""Layered CPF settings.

:class:`CpfProperties` is a string-to-string store filled once, at
construction, from up to three ``config.properties`` files:

1. the one bundled with the library (always expected)
2. a global one in the repository's ``cpf`` folder
3. a plugin-specific one in the plugin's system folder

Each later file overrides the keys it repeats, so plugin-specific settings
beat global ones, which beat the bundled defaults.  A missing file is skipped.
A read failure stops loading, is logged, and leaves whatever was loaded so far
in place.

Typed getters never raise: empty or unparseable values yield the caller's
default.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Iterator, MutableMapping
from typing import IO, Any, ClassVar

from pycpf import _properties
from pycpf._constants import (
    GLOBAL_SETTINGS_PATH,
    INT_MAX,
    INT_MIN,
    LONG_MAX,
    LONG_MIN,
    PROPERTIES_FILE,
    SYSTEM_SETTINGS_PATH,
)
from pycpf.environment import PluginEnvironment
from pycpf.exceptions import CpfPropertiesFormatError
from pycpf.repository import ContentAccessFactory, PackageResourceReadAccess, ReadAccess

_logger = logging.getLogger(__name__)

# Double.parseDouble syntax, after trimming control characters and spaces.
_FLOAT_RE = re.compile(
    r"[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[fFdD]?)"
)
_HEX_FLOAT_RE = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+[fFdD]?"
)
_JAVA_TRIM = "".join(chr(code) for code in range(0x21))


def _parse_bounded_int(value: str, minimum: int, maximum: int) -> int | None:
    """Integer.parseInt rules: optional sign, then Unicode decimal digits."""
    digits = value[1:] if value[:1] in ("+", "-") else value
    if not digits.isdecimal():
        return None
    number = int(value)
    if not minimum <= number <= maximum:
        return None
    return number


def _parse_java_double(value: str) -> float | None:
    text = value.strip(_JAVA_TRIM)
    if _FLOAT_RE.fullmatch(text):
        unsigned = text.lstrip("+-")
        if unsigned in ("NaN", "Infinity"):
            return float(text.replace("Infinity", "inf"))
        return float(text.rstrip("fFdD"))
    if _HEX_FLOAT_RE.fullmatch(text):
        return float.fromhex(text.rstrip("fFdD"))
    return None


class CpfProperties(MutableMapping[str, str]):
    """Mutable settings store loaded from the plugin's property sources.

    Usage::

        props = CpfProperties.get_instance()
        if props.get_boolean_property("cache.enabled", True):
            ...

    Tests and embedding code can build their own instance instead::

        props = CpfProperties(FileSystemContentAccessFactory(repo, system))
    """

    _instance: ClassVar[CpfProperties | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(
        self,
        accessor: ContentAccessFactory | None = None,
        *,
        bundled: ReadAccess | None = None,
    ) -> None:
        self._data: dict[str, str] = {}
        if accessor is not None:
            self._load_settings(accessor, bundled if bundled is not None else PackageResourceReadAccess())

    # ------------------------------------------------------------------
    # Singleton
    # ------------------------------------------------------------------

    @classmethod
    def get_instance(cls) -> CpfProperties:
        """Return the process-wide store, loading it on first use."""
        instance = cls._instance
        if instance is not None:
            return instance
        with cls._instance_lock:
            if cls._instance is None:
                env = PluginEnvironment.env()
                cls._instance = cls(env.content_access, bundled=env.bundled)
            return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the process-wide store; the next :meth:`get_instance` reloads."""
        with cls._instance_lock:
            cls._instance = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _load_properties(self, location: ReadAccess, file_name: str) -> bool:
        if not location.file_exists(file_name):
            return False
        with location.get_file_input_stream(file_name) as stream:
            self.load(stream)
        return True

    def _load_settings(self, accessor: ContentAccessFactory, bundled: ReadAccess) -> None:
        try:
            if not self._load_properties(bundled, PROPERTIES_FILE):
                _logger.warning("No CPF base settings.")

            global_reader = accessor.get_plugin_repository_reader(GLOBAL_SETTINGS_PATH)
            if not self._load_properties(global_reader, PROPERTIES_FILE):
                _logger.debug("No global CPF settings.")

            system_reader = accessor.get_plugin_system_reader(SYSTEM_SETTINGS_PATH)
            if not self._load_properties(system_reader, PROPERTIES_FILE):
                _logger.debug("No plugin-specific CPF settings.")
        except (OSError, CpfPropertiesFormatError):
            _logger.error("Failed to read CPF settings", exc_info=True)

    def load(self, stream: IO[Any]) -> None:
        """Merge a properties stream into the store; its keys win."""
        self._data.update(_properties.load(stream))

    def store(self, stream: IO[bytes], comment: str | None = None) -> None:
        """Write the store to a binary stream in properties format."""
        stream.write(_properties.dumps(self._data, comment=comment).encode(_properties.ENCODING))

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError("CPF properties keys and values must be strings")
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"CpfProperties({self._data!r})"

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_property(self, key: str, default: str | None = None) -> str | None:
        return self._data.get(key, default)

    def set_property(self, key: str, value: str) -> str | None:
        """Set *key* and return its previous value."""
        previous = self._data.get(key)
        self[key] = value
        return previous

    def property_names(self) -> list[str]:
        return list(self._data)

    def get_boolean_property(self, key: str, default: bool) -> bool:
        """Return ``True`` only for a case-insensitive ``"true"``.

        Any other non-empty value is ``False``; a missing or empty value gives
        *default*.
        """
        value = self._data.get(key)
        if value:
            return value.lower() == "true"
        return default

    def get_int_property(self, key: str, default: int) -> int:
        value = self._data.get(key)
        if value:
            number = _parse_bounded_int(value, INT_MIN, INT_MAX)
            if number is not None:
                return number
            _logger.error("get_int_property: %s is not a valid int value.", key)
        return default

    def get_long_property(self, key: str, default: int) -> int:
        value = self._data.get(key)
        if value:
            number = _parse_bounded_int(value, LONG_MIN, LONG_MAX)
            if number is not None:
                return number
            _logger.error("get_long_property: %s is not a valid long value.", key)
        return default

    def get_float_property(self, key: str, default: float) -> float:
        value = self._data.get(key)
        if value:
            number = _parse_java_double(value)
            if number is not None:
                return number
            _logger.error("get_float_property: %s is not a valid float value.", key)
        return default
