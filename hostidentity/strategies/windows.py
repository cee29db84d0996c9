"""
windows.py - Fact lookups for Windows through the Win32 API.

All text facts come from UTF-16 "probe size, then fill" calls, negotiated by
``grow_buffer``. ``Win32Api`` performs exactly one native call per ``fill``
and reports what the OS said; it never interprets lengths itself.

Calls used:
- ``GetUserNameW``                                     username
- ``GetUserNameExW(NameDisplay)``                      real name
- ``GetUserNameExW(NameUserPrincipal)``                account
- ``GetComputerNameExW(ComputerNamePhysicalDnsHostname)``      device name
- ``GetComputerNameExW(ComputerNamePhysicalDnsFullyQualified)`` hostname
- ``GetUserPreferredUILanguages(MUI_LANGUAGE_NAME)``   languages
- registry ``HKLM\\SOFTWARE\\Microsoft\\Windows NT\\CurrentVersion``  distribution
"""

import ctypes

from typing import Callable, Dict, List, Optional

from hostidentity.exceptions.exceptions import (
    AbsentError,
    IoFailureError,
    PlatformUnsupportedError,
)
from hostidentity.native.buffer import FillStatus, NativeReply, grow_buffer
from hostidentity.native.text import OsEncoding, OsText
from hostidentity.strategies.base import Strategy
from hostidentity.taxonomy.arch import Arch, classify_arch
from hostidentity.taxonomy.desktop import DesktopEnv
from hostidentity.taxonomy.platform import Platform

ERROR_INSUFFICIENT_BUFFER = 122
ERROR_MORE_DATA = 234
ERROR_NONE_MAPPED = 1332
ERROR_NO_SUCH_DOMAIN = 1355

# Codes meaning "there is no such value" rather than "the call broke".
ABSENT_CODES = frozenset({ERROR_NONE_MAPPED, ERROR_NO_SUCH_DOMAIN})
RETRY_CODES = frozenset({ERROR_INSUFFICIENT_BUFFER, ERROR_MORE_DATA})

NAME_DISPLAY = 3
NAME_USER_PRINCIPAL = 8
COMPUTER_NAME_PHYSICAL_DNS_HOSTNAME = 5
COMPUTER_NAME_PHYSICAL_DNS_FULLY_QUALIFIED = 7
MUI_LANGUAGE_NAME = 0x8

CURRENT_VERSION_KEY = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion"
WINDOWS_11_BUILD = 22000


class Win32Api:
    """
    Thin ctypes binding; each method performs a single native call.

    Every method takes the buffer capacity in UTF-16 units and returns a
    ``NativeReply`` describing the outcome.
    """

    def __init__(self):
        if not hasattr(ctypes, "WinDLL"):
            raise PlatformUnsupportedError(
                message="The Win32 API is only available on Windows.",
                step="windows",
                platform="windows",
            )
        self.advapi32 = ctypes.WinDLL("advapi32", use_last_error=True)
        self.secur32 = ctypes.WinDLL("secur32", use_last_error=True)
        self.kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)

    @staticmethod
    def _buffer(capacity: int):
        if capacity <= 0:
            return None
        return (ctypes.c_uint16 * capacity)()

    @staticmethod
    def _reply(ok: bool, size: int, buffer, written: int) -> NativeReply:
        if ok:
            return NativeReply(FillStatus.OK, written, buffer)
        code = ctypes.get_last_error()
        if code in RETRY_CODES:
            return NativeReply(FillStatus.INSUFFICIENT, size)
        if code in ABSENT_CODES:
            return NativeReply(FillStatus.INSUFFICIENT, 0)
        return NativeReply(FillStatus.FAILED, code)

    def get_user_name(self, capacity: int) -> NativeReply:
        buffer = self._buffer(capacity)
        size = ctypes.c_ulong(capacity)
        ok = self.advapi32.GetUserNameW(buffer, ctypes.byref(size))
        # On success the size counts the terminating NUL.
        return self._reply(bool(ok), size.value, buffer, size.value - 1)

    def get_user_name_ex(self, name_format: int, capacity: int) -> NativeReply:
        buffer = self._buffer(capacity)
        size = ctypes.c_ulong(capacity)
        ok = self.secur32.GetUserNameExW(name_format, buffer, ctypes.byref(size))
        return self._reply(bool(ok), size.value, buffer, size.value)

    def get_computer_name_ex(self, name_format: int, capacity: int) -> NativeReply:
        buffer = self._buffer(capacity)
        size = ctypes.c_ulong(capacity)
        ok = self.kernel32.GetComputerNameExW(name_format, buffer, ctypes.byref(size))
        return self._reply(bool(ok), size.value, buffer, size.value)

    def get_user_preferred_ui_languages(self, capacity: int) -> NativeReply:
        buffer = self._buffer(capacity)
        count = ctypes.c_ulong(0)
        size = ctypes.c_ulong(capacity)
        ok = self.kernel32.GetUserPreferredUILanguages(
            MUI_LANGUAGE_NAME, ctypes.byref(count), buffer, ctypes.byref(size)
        )
        if ok and buffer is None:
            # A NULL buffer asks for the size only.
            return NativeReply(FillStatus.INSUFFICIENT, size.value)
        return self._reply(bool(ok), size.value, buffer, size.value)


def _read_current_version() -> Dict[str, object]:
    import winreg

    values = {}
    try:
        key = winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, CURRENT_VERSION_KEY)
    except FileNotFoundError as e:
        raise AbsentError(
            message="The CurrentVersion registry key is missing.",
            step="distro",
            source=CURRENT_VERSION_KEY,
        ) from e
    except OSError as e:
        raise IoFailureError(
            message="Failed to open the CurrentVersion registry key.",
            step="distro",
            path=CURRENT_VERSION_KEY,
            errno=e.errno,
        ) from e

    with key:
        for name in ("ProductName", "DisplayVersion", "ReleaseId", "CurrentBuildNumber"):
            try:
                values[name] = winreg.QueryValueEx(key, name)[0]
            except FileNotFoundError:
                continue
    return values


def distro_from_registry(values: Dict[str, object]) -> str:
    """
    Distribution string such as ``"Windows 11 Pro 23H2"`` from CurrentVersion values.

    ``ProductName`` still says "Windows 10" on Windows 11, so the build number
    decides.
    """
    product = str(values.get("ProductName") or "").strip()
    if not product:
        raise AbsentError(
            message="ProductName is not set.", step="distro", source=CURRENT_VERSION_KEY
        )

    try:
        build = int(str(values.get("CurrentBuildNumber", "0")))
    except ValueError:
        build = 0
    if build >= WINDOWS_11_BUILD and product.startswith("Windows 10"):
        product = "Windows 11" + product[len("Windows 10") :]

    version = str(values.get("DisplayVersion") or values.get("ReleaseId") or "").strip()
    return f"{product} {version}" if version else product


class WindowsStrategy(Strategy):
    """
    Strategy for Windows.

    Args:
        api: Object with the ``Win32Api`` methods, created on first use when omitted.
        registry (Callable): Returns the CurrentVersion registry values.
        **kwargs: Passed to ``Strategy``.
    """

    name = "windows"

    def __init__(
        self,
        api: Optional[Win32Api] = None,
        registry: Callable[[], Dict[str, object]] = _read_current_version,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._api = api
        self._registry = registry

    @property
    def api(self):
        if self._api is None:
            self._api = Win32Api()
        return self._api

    def _name(self, fill, call: str) -> OsText:
        return grow_buffer(fill, encoding=OsEncoding.UTF16, name=call)

    def realname_os(self) -> OsText:
        return self._name(
            lambda capacity: self.api.get_user_name_ex(NAME_DISPLAY, capacity),
            "GetUserNameExW",
        )

    def username_os(self) -> OsText:
        return self._name(self.api.get_user_name, "GetUserNameW")

    def account_os(self) -> OsText:
        try:
            return self._name(
                lambda capacity: self.api.get_user_name_ex(NAME_USER_PRINCIPAL, capacity),
                "GetUserNameExW",
            )
        except (AbsentError, IoFailureError) as e:
            self.logger.log_debug(f"No user principal name, using username: {e}")
            return self.username_os()

    def devicename_os(self) -> OsText:
        return self._name(
            lambda capacity: self.api.get_computer_name_ex(
                COMPUTER_NAME_PHYSICAL_DNS_HOSTNAME, capacity
            ),
            "GetComputerNameExW",
        )

    def hostname_os(self) -> OsText:
        return self._name(
            lambda capacity: self.api.get_computer_name_ex(
                COMPUTER_NAME_PHYSICAL_DNS_FULLY_QUALIFIED, capacity
            ),
            "GetComputerNameExW",
        )

    def distro_os(self) -> OsText:
        return OsText.from_str(distro_from_registry(self._registry()))

    def desktop_env(self) -> DesktopEnv:
        return DesktopEnv.WINDOWS

    def platform(self) -> Platform:
        return Platform.WINDOWS

    def arch(self) -> Arch:
        # A 32-bit interpreter on 64-bit Windows sees the real machine in the W6432 variable.
        return classify_arch(
            str(self.env_text("PROCESSOR_ARCHITEW6432", "PROCESSOR_ARCHITECTURE"))
        )

    def langs(self) -> List[str]:
        raw = self._name(
            self.api.get_user_preferred_ui_languages, "GetUserPreferredUILanguages"
        )
        langs = [lang for lang in str(raw).split("\0") if lang]
        if not langs:
            raise AbsentError(
                message="No preferred UI languages.",
                step="langs",
                source="GetUserPreferredUILanguages",
            )
        return langs
