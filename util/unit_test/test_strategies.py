#!/usr/bin/env python3

"""
Unit tests for the Windows, web, WASI, Redox and fake strategies and for
strategy selection.
"""

import tempfile
import unittest

from pathlib import Path

from hostidentity.exceptions.exceptions import (
    AbsentError,
    ConfigurationError,
    IoFailureError,
    PlatformUnsupportedError,
)
from hostidentity.native.buffer import FillStatus, NativeReply
from hostidentity.strategies import (
    FakeStrategy,
    RedoxStrategy,
    UnixStrategy,
    WasiStrategy,
    WebStrategy,
    WindowsStrategy,
    select_strategy,
    strategy_name_for,
)
from hostidentity.strategies.windows import (
    COMPUTER_NAME_PHYSICAL_DNS_FULLY_QUALIFIED,
    COMPUTER_NAME_PHYSICAL_DNS_HOSTNAME,
    NAME_DISPLAY,
    NAME_USER_PRINCIPAL,
    distro_from_registry,
)
from hostidentity.taxonomy.arch import Arch
from hostidentity.taxonomy.desktop import DesktopEnv
from hostidentity.taxonomy.platform import Platform


def native_call(value):
    """Two-phase call answering with ``value`` once the buffer fits it."""

    def fill(capacity):
        if value is None:
            return NativeReply(FillStatus.INSUFFICIENT, 0)
        if capacity < len(value) + 1:
            return NativeReply(FillStatus.INSUFFICIENT, len(value) + 1)
        buffer = bytearray(capacity * 2)
        data = value.encode("utf-16-le")
        buffer[: len(data)] = data
        return NativeReply(FillStatus.OK, len(value), buffer)

    return fill


class FakeWin32Api:
    """Canned answers in place of the Win32 calls."""

    def __init__(self, names=None, computer=None, languages="en-US\0fr-FR\0\0"):
        self.names = names or {}
        self.computer = computer or {}
        self.languages = languages

    def get_user_name(self, capacity):
        return native_call(self.names.get("user"))(capacity)

    def get_user_name_ex(self, name_format, capacity):
        return native_call(self.names.get(name_format))(capacity)

    def get_computer_name_ex(self, name_format, capacity):
        return native_call(self.computer.get(name_format))(capacity)

    def get_user_preferred_ui_languages(self, capacity):
        return native_call(self.languages)(capacity)


class TestWindowsStrategy(unittest.TestCase):
    """Fact lookups of WindowsStrategy through a fake Win32 binding"""

    REGISTRY = {
        "ProductName": "Windows 10 Pro",
        "CurrentBuildNumber": "22631",
        "DisplayVersion": "23H2",
    }

    def make(self, api=None, environ=None, registry=None):
        return WindowsStrategy(
            api=api
            or FakeWin32Api(
                names={
                    "user": "jeron",
                    NAME_DISPLAY: "Jeron Lau",
                    NAME_USER_PRINCIPAL: "jeron@example.com",
                },
                computer={
                    COMPUTER_NAME_PHYSICAL_DNS_HOSTNAME: "Jeron-Desktop",
                    COMPUTER_NAME_PHYSICAL_DNS_FULLY_QUALIFIED: "Jeron-Desktop.corp.example.com",
                },
            ),
            registry=registry or (lambda: dict(self.REGISTRY)),
            environ=environ or {"PROCESSOR_ARCHITECTURE": "AMD64"},
        )

    def test_user_facts(self):
        strategy = self.make()
        self.assertEqual(str(strategy.realname_os()), "Jeron Lau")
        self.assertEqual(str(strategy.username_os()), "jeron")
        self.assertEqual(str(strategy.account_os()), "jeron@example.com")

    def test_account_falls_back_to_username(self):
        strategy = self.make(api=FakeWin32Api(names={"user": "jeron"}))
        self.assertEqual(str(strategy.account_os()), "jeron")

    def test_realname_absent_when_not_mapped(self):
        strategy = self.make(api=FakeWin32Api(names={"user": "jeron"}))
        with self.assertRaises(AbsentError):
            strategy.realname_os()

    def test_device_and_host_names(self):
        strategy = self.make()
        self.assertEqual(str(strategy.devicename_os()), "Jeron-Desktop")
        self.assertEqual(str(strategy.hostname_os()), "Jeron-Desktop.corp.example.com")

    def test_distro(self):
        self.assertEqual(str(self.make().distro_os()), "Windows 11 Pro 23H2")

    def test_fixed_facts(self):
        strategy = self.make()
        self.assertEqual(strategy.desktop_env(), DesktopEnv.WINDOWS)
        self.assertEqual(strategy.platform(), Platform.WINDOWS)

    def test_arch(self):
        self.assertEqual(self.make().arch(), Arch.X64)
        strategy = self.make(
            environ={"PROCESSOR_ARCHITECTURE": "x86", "PROCESSOR_ARCHITEW6432": "ARM64"}
        )
        self.assertEqual(strategy.arch(), Arch.ARM64)

    def test_langs_split_on_nul(self):
        self.assertEqual(self.make().langs(), ["en-US", "fr-FR"])

    def test_native_failure_is_io_failure(self):
        class BrokenApi(FakeWin32Api):
            def get_user_name(self, capacity):
                return NativeReply(FillStatus.FAILED, 5)

        with self.assertRaises(IoFailureError):
            self.make(api=BrokenApi()).username_os()


class TestDistroFromRegistry(unittest.TestCase):
    """Windows distribution string"""

    def test_windows_10_stays(self):
        values = {"ProductName": "Windows 10 Home", "CurrentBuildNumber": "19045", "DisplayVersion": "22H2"}
        self.assertEqual(distro_from_registry(values), "Windows 10 Home 22H2")

    def test_release_id_when_no_display_version(self):
        values = {"ProductName": "Windows 10 Pro", "ReleaseId": "1809"}
        self.assertEqual(distro_from_registry(values), "Windows 10 Pro 1809")

    def test_missing_product_is_absent(self):
        with self.assertRaises(AbsentError):
            distro_from_registry({})


class FakeBrowserHost:
    """Snapshot of navigator fields."""

    def __init__(self, user_agent, languages=("en-US", "en"), platform="Win32"):
        self._user_agent = user_agent
        self._languages = languages
        self._platform = platform

    def user_agent(self):
        return self._user_agent

    def languages(self):
        return self._languages

    def platform(self):
        return self._platform


EDGE_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36 Edg/124.0.2478.67"
)


class TestWebStrategy(unittest.TestCase):
    """Fact lookups of WebStrategy against a fake browser host"""

    def test_browser_facts(self):
        strategy = WebStrategy(host=FakeBrowserHost(EDGE_UA))
        self.assertEqual(str(strategy.devicename_os()), "Microsoft Edge 124.0")
        self.assertEqual(str(strategy.distro_os()), "Windows 10")
        self.assertEqual(strategy.platform(), Platform.WINDOWS)
        self.assertEqual(strategy.desktop_env(), DesktopEnv.WEB_BROWSER)
        self.assertEqual(strategy.langs(), ["en-US", "en"])

    def test_placeholders(self):
        strategy = WebStrategy(host=FakeBrowserHost(EDGE_UA))
        self.assertEqual(str(strategy.realname_os()), "Anonymous")
        self.assertEqual(str(strategy.username_os()), "anonymous")
        self.assertEqual(str(strategy.hostname_os()), "localhost")
        self.assertIn(strategy.arch(), (Arch.WASM32, Arch.WASM64))

    def test_without_host_is_unsupported(self):
        with self.assertRaises(PlatformUnsupportedError):
            WebStrategy().devicename_os()

    def test_empty_user_agent_is_absent(self):
        with self.assertRaises(AbsentError):
            WebStrategy(host=FakeBrowserHost("")).distro_os()

    def test_no_languages_is_absent(self):
        with self.assertRaises(AbsentError):
            WebStrategy(host=FakeBrowserHost(EDGE_UA, languages=[])).langs()


class TestWasiStrategy(unittest.TestCase):
    """Fact lookups of WasiStrategy from host-provided variables"""

    ENVIRON = {
        "USER": "jeron",
        "NAME": "Jeron's Laptop",
        "HOSTNAME": "jeron-laptop",
        "LANGS": "en-US;de-DE",
    }

    def test_facts(self):
        strategy = WasiStrategy(environ=self.ENVIRON)
        self.assertEqual(str(strategy.username_os()), "jeron")
        self.assertEqual(str(strategy.realname_os()), "jeron")
        self.assertEqual(str(strategy.devicename_os()), "Jeron's Laptop")
        self.assertEqual(str(strategy.hostname_os()), "jeron-laptop")
        self.assertEqual(strategy.platform(), Platform.WASI)
        self.assertEqual(strategy.langs(), ["en-US", "de-DE"])

    def test_unset_variables_are_absent(self):
        strategy = WasiStrategy(environ={})
        for lookup in (strategy.username_os, strategy.hostname_os, strategy.langs):
            with self.assertRaises(AbsentError):
                lookup()
        with self.assertRaises(AbsentError):
            strategy.distro_os()

    def test_desktop_is_unknown(self):
        self.assertEqual(WasiStrategy(environ={}).desktop_env(), DesktopEnv.unknown("Unknown WASI"))


class TestRedoxStrategy(unittest.TestCase):
    """Fact lookups of RedoxStrategy against a temporary filesystem root"""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        (self.root / "etc").mkdir()
        (self.root / "etc" / "passwd").write_text(
            "root;0;0;root;/root;/bin/ion\nuser;1000;1000;Default User;/home/user;/bin/ion\n"
        )
        (self.root / "etc" / "hostname").write_text("redox-box\n")
        (self.root / "etc" / "os-release").write_text('PRETTY_NAME="Redox OS 0.9.0"\n')
        self.uname = self.root / "uname"
        self.uname.write_text("Redox\nredox-box\n0.9.0\n#1\nx86_64\n")

    def tearDown(self):
        self.tmp.cleanup()

    def make(self, ids=(1000, 1000)):
        return RedoxStrategy(
            root=self.root, uname_path=self.uname, ids=lambda: ids, environ={"LANG": "en_US"}
        )

    def test_user_facts(self):
        strategy = self.make()
        self.assertEqual(str(strategy.username_os()), "user")
        self.assertEqual(str(strategy.realname_os()), "Default User")

    def test_unknown_uid_is_absent(self):
        with self.assertRaises(AbsentError):
            self.make(ids=(42, 42)).username_os()

    def test_host_facts(self):
        strategy = self.make()
        self.assertEqual(str(strategy.hostname_os()), "redox-box")
        self.assertEqual(str(strategy.devicename_os()), "redox-box")
        self.assertEqual(str(strategy.distro_os()), "Redox OS 0.9.0")
        self.assertEqual(strategy.arch(), Arch.X64)
        self.assertEqual(strategy.desktop_env(), DesktopEnv.ORBITAL)
        self.assertEqual(strategy.platform(), Platform.REDOX)
        self.assertEqual(strategy.langs(), ["en_US"])


class TestFakeStrategy(unittest.TestCase):
    """Literal answers of FakeStrategy"""

    def test_literals(self):
        strategy = FakeStrategy()
        self.assertEqual(str(strategy.realname_os()), "Anonymous")
        self.assertEqual(str(strategy.username_os()), "anonymous")
        self.assertEqual(str(strategy.account_os()), "anonymous")
        self.assertEqual(str(strategy.devicename_os()), "Unknown")
        self.assertEqual(str(strategy.hostname_os()), "localhost")
        self.assertEqual(str(strategy.distro_os()), "Emulated")
        self.assertEqual(strategy.desktop_env(), DesktopEnv.unknown("WebAssembly"))
        self.assertTrue(strategy.platform().is_unknown)
        self.assertEqual(strategy.langs(), ["en-US"])


class TestSelectStrategy(unittest.TestCase):
    """Choosing the strategy for a platform or by name"""

    def test_by_platform(self):
        self.assertEqual(strategy_name_for(Platform.LINUX), "unix")
        self.assertEqual(strategy_name_for(Platform.BSD), "unix")
        self.assertEqual(strategy_name_for(Platform.MACOS), "apple")
        self.assertEqual(strategy_name_for(Platform.WINDOWS), "windows")
        self.assertEqual(strategy_name_for(Platform.unknown("haiku")), "unix")

    def test_by_name(self):
        self.assertIsInstance(select_strategy("fake"), FakeStrategy)
        self.assertIsInstance(select_strategy("WASI"), WasiStrategy)
        self.assertIsInstance(select_strategy(platform=Platform.ILLUMOS), UnixStrategy)

    def test_web_without_host_is_fake(self):
        self.assertIsInstance(select_strategy("web"), FakeStrategy)
        self.assertIsInstance(select_strategy(platform=Platform.WEB), FakeStrategy)

    def test_web_with_host(self):
        strategy = select_strategy("web", browser_host=FakeBrowserHost(EDGE_UA))
        self.assertIsInstance(strategy, WebStrategy)

    def test_unknown_name(self):
        with self.assertRaises(ConfigurationError):
            select_strategy("beos")


if __name__ == "__main__":
    unittest.main()
