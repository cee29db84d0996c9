#!/usr/bin/env python3

"""
Unit tests for hostidentity.strategies.unix and hostidentity.strategies.apple
Every OS source (passwd, uname, /etc files, environment) is injected so the
tests behave the same on any host.
"""

import os
import subprocess
import tempfile
import unittest

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from hostidentity.exceptions.exceptions import AbsentError, IoFailureError
from hostidentity.native.text import OsText
from hostidentity.strategies.apple import AppleStrategy, parse_apple_languages
from hostidentity.strategies import base as strategy_base
from hostidentity.strategies.base import parse_key_values, prettify, run_command
from hostidentity.strategies.unix import UnixStrategy, gecos_name
from hostidentity.taxonomy.arch import Arch
from hostidentity.taxonomy.desktop import DesktopEnv
from hostidentity.taxonomy.platform import Platform


def passwd_entry(name="jeron", gecos="Jeron Lau,,,"):
    def lookup(uid):
        return SimpleNamespace(pw_name=name, pw_gecos=gecos)

    return lookup


def missing_passwd(uid):
    raise KeyError(uid)


def uname_of(nodename="Jeron-Desktop", machine="x86_64"):
    return lambda: SimpleNamespace(nodename=nodename, machine=machine)


class TestGecos(unittest.TestCase):
    """Extraction of the full-name subfield"""

    def test_trailing_commas(self):
        self.assertEqual(gecos_name(OsText(b"Jeron Lau,,,")).data, b"Jeron Lau")

    def test_other_subfields_are_dropped(self):
        name = gecos_name(OsText(b"Ada Lovelace,Room 1,555-0100,555-0101,"))
        self.assertEqual(str(name), "Ada Lovelace")

    def test_plain_name(self):
        self.assertEqual(str(gecos_name(OsText(b"Grace"))), "Grace")


class TestHelpers(unittest.TestCase):
    """os-release parsing and hostname prettifying"""

    def test_parse_key_values(self):
        pairs = parse_key_values(
            b'# comment\nNAME="Fedora Linux"\nVERSION_ID=40\nbroken line\n'
            b"PRETTY_NAME='Fedora Linux 40 (Workstation Edition)'\n"
        )
        self.assertEqual(pairs[b"NAME"], b"Fedora Linux")
        self.assertEqual(pairs[b"VERSION_ID"], b"40")
        self.assertEqual(pairs[b"PRETTY_NAME"], b"Fedora Linux 40 (Workstation Edition)")
        self.assertNotIn(b"broken line", pairs)

    def test_prettify(self):
        self.assertEqual(prettify("my-laptop.local"), "My Laptop Local")
        self.assertEqual(prettify("Jeron-Desktop"), "Jeron Desktop")


class TestUnixStrategy(unittest.TestCase):
    """Fact lookups of UnixStrategy against a temporary filesystem root"""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        (self.root / "etc").mkdir()

    def tearDown(self):
        self.tmp.cleanup()

    def make(self, environ=None, passwd=None, uname=None):
        return UnixStrategy(
            environ=environ or {},
            root=self.root,
            passwd=passwd or passwd_entry(),
            uname=uname or uname_of(),
            geteuid=lambda: 1000,
        )

    def write(self, relative, content):
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

    def test_realname_from_gecos(self):
        self.assertEqual(str(self.make().realname_os()), "Jeron Lau")

    def test_empty_gecos_is_absent(self):
        strategy = self.make(passwd=passwd_entry(gecos=",,,"))
        with self.assertRaises(AbsentError):
            strategy.realname_os()

    def test_missing_passwd_entry_is_absent(self):
        strategy = self.make(passwd=missing_passwd)
        with self.assertRaises(AbsentError):
            strategy.realname_os()

    def test_username_from_passwd(self):
        self.assertEqual(str(self.make().username_os()), "jeron")

    def test_username_falls_back_to_environment(self):
        strategy = self.make(environ={"LOGNAME": "builder"}, passwd=missing_passwd)
        self.assertEqual(str(strategy.username_os()), "builder")

    def test_username_absent_everywhere(self):
        strategy = self.make(passwd=missing_passwd)
        with self.assertRaises(AbsentError):
            strategy.username_os()

    def test_unreadable_passwd_falls_back_to_environment(self):
        def broken_passwd(uid):
            raise OSError(5, "Input/output error")

        strategy = self.make(environ={"USER": "builder"}, passwd=broken_passwd)
        self.assertEqual(str(strategy.username_os()), "builder")
        with self.assertRaises(IoFailureError):
            strategy.realname_os()

    def test_account_is_username(self):
        self.assertEqual(self.make().account_os(), self.make().username_os())

    def test_hostname_keeps_os_casing(self):
        strategy = self.make(uname=uname_of(nodename="Jeron-Desktop\n"))
        self.assertEqual(str(strategy.hostname_os()), "Jeron-Desktop")

    def test_empty_hostname_is_absent(self):
        with self.assertRaises(AbsentError):
            self.make(uname=uname_of(nodename="")).hostname_os()

    def test_devicename_from_machine_info(self):
        self.write("etc/machine-info", 'PRETTY_HOSTNAME="Jeron\'s Desktop"\n')
        self.assertEqual(str(self.make().devicename_os()), "Jeron's Desktop")

    def test_devicename_derived_from_hostname(self):
        self.assertEqual(str(self.make().devicename_os()), "Jeron Desktop")

    def test_distro_pretty_name(self):
        self.write(
            "etc/os-release",
            'NAME="Ubuntu"\nPRETTY_NAME="Ubuntu 24.04 LTS"\n',
        )
        self.assertEqual(str(self.make().distro_os()), "Ubuntu 24.04 LTS")

    def test_distro_name_when_no_pretty_name(self):
        self.write("usr/lib/os-release", "NAME=Alpine\n")
        self.assertEqual(str(self.make().distro_os()), "Alpine")

    def test_distro_absent_without_os_release(self):
        with self.assertRaises(AbsentError):
            self.make().distro_os()

    def test_unreadable_os_release_is_io_failure(self):
        # A directory in place of the file cannot be read.
        (self.root / "etc" / "os-release").mkdir()
        with self.assertRaises(IoFailureError):
            self.make().distro_os()

    def test_desktop_from_xdg(self):
        strategy = self.make(environ={"XDG_CURRENT_DESKTOP": "ubuntu:GNOME"})
        self.assertEqual(strategy.desktop_env(), DesktopEnv.GNOME)

    def test_desktop_session_fallback(self):
        strategy = self.make(environ={"DESKTOP_SESSION": "plasma"})
        self.assertEqual(strategy.desktop_env(), DesktopEnv.KDE)

    def test_unrecognized_desktop(self):
        strategy = self.make(environ={"XDG_CURRENT_DESKTOP": "FooBarDE"})
        self.assertEqual(strategy.desktop_env(), DesktopEnv.unknown("FooBarDE"))

    def test_tty_session_is_console(self):
        strategy = self.make(environ={"XDG_SESSION_TYPE": "tty"})
        self.assertEqual(strategy.desktop_env(), DesktopEnv.CONSOLE)

    def test_no_desktop_is_absent(self):
        with self.assertRaises(AbsentError):
            self.make().desktop_env()

    def test_arch_from_uname(self):
        self.assertEqual(self.make(uname=uname_of(machine="aarch64")).arch(), Arch.ARM64)

    def test_langs_order(self):
        strategy = self.make(
            environ={"LANGUAGE": "fr_FR:en_GB", "LANG": "de_DE.UTF-8", "LC_ALL": ""}
        )
        self.assertEqual(strategy.langs(), ["fr_FR", "en_GB", "de_DE.UTF-8"])

    def test_langs_absent(self):
        with self.assertRaises(AbsentError):
            self.make().langs()


class TestLiveEnvironment(unittest.TestCase):
    """Strategies read os.environ when no mapping is injected"""

    def test_reads_process_environment(self):
        strategy = UnixStrategy(passwd=missing_passwd, geteuid=lambda: 1000)
        with patch.dict(os.environ, {"USER": "ci", "LANG": "C"}, clear=True):
            self.assertEqual(str(strategy.username_os()), "ci")
            self.assertEqual(strategy.langs(), ["C"])
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(AbsentError):
                strategy.username_os()


class TestRunCommand(unittest.TestCase):
    """Helper executable invocation"""

    def test_trimmed_output(self):
        completed = MagicMock(stdout=b"  Jeron's MacBook Pro\n")
        with patch.object(strategy_base.subprocess, "run", return_value=completed) as run:
            result = run_command(["scutil", "--get", "ComputerName"], "devicename")
        self.assertEqual(str(result), "Jeron's MacBook Pro")
        self.assertEqual(run.call_args[0][0], ["scutil", "--get", "ComputerName"])

    def test_missing_executable_is_absent(self):
        with patch.object(strategy_base.subprocess, "run", side_effect=FileNotFoundError()):
            with self.assertRaises(AbsentError):
                run_command(["sw_vers"], "distro")

    def test_non_zero_exit_is_io_failure(self):
        error = subprocess.CalledProcessError(1, ["defaults"])
        with patch.object(strategy_base.subprocess, "run", side_effect=error):
            with self.assertRaises(IoFailureError) as ctx:
                run_command(["defaults", "read"], "langs")
        self.assertEqual(ctx.exception.context["errno"], 1)

    def test_timeout_is_io_failure(self):
        error = subprocess.TimeoutExpired(["scutil"], 5.0)
        with patch.object(strategy_base.subprocess, "run", side_effect=error):
            with self.assertRaises(IoFailureError):
                run_command(["scutil"], "devicename")

    def test_empty_output_is_absent(self):
        with patch.object(strategy_base.subprocess, "run", return_value=MagicMock(stdout=b"\n")):
            with self.assertRaises(AbsentError):
                run_command(["sw_vers"], "distro")


class FakeRunner:
    """Stands in for run_command with canned tool output."""

    def __init__(self, outputs):
        self.outputs = outputs
        self.calls = []

    def __call__(self, argv, step):
        self.calls.append(tuple(argv))
        output = self.outputs.get(tuple(argv))
        if output is None:
            raise AbsentError(message=f"{argv[0]} missing", step=step, source=argv[0])
        return OsText(output)


class TestAppleStrategy(unittest.TestCase):
    """Fact lookups of AppleStrategy with canned tool output"""

    OUTPUTS = {
        ("scutil", "--get", "ComputerName"): b"Jeron's MacBook Pro",
        ("sw_vers", "-productName"): b"macOS",
        ("sw_vers", "-productVersion"): b"14.4.1",
        ("defaults", "read", "-g", "AppleLanguages"): b'(\n    "en-US",\n    "fr-FR"\n)',
    }

    def make(self, outputs=None, environ=None):
        return AppleStrategy(
            runner=FakeRunner(self.OUTPUTS if outputs is None else outputs),
            environ=environ or {},
            passwd=passwd_entry(),
            uname=uname_of(nodename="jerons-mbp", machine="arm64"),
            geteuid=lambda: 501,
        )

    def test_devicename(self):
        self.assertEqual(str(self.make().devicename_os()), "Jeron's MacBook Pro")

    def test_distro(self):
        self.assertEqual(str(self.make().distro_os()), "macOS 14.4.1")

    def test_fixed_facts(self):
        strategy = self.make()
        self.assertEqual(strategy.desktop_env(), DesktopEnv.AQUA)
        self.assertEqual(strategy.platform(), Platform.MACOS)
        self.assertEqual(strategy.arch(), Arch.ARM64)

    def test_langs(self):
        self.assertEqual(self.make().langs(), ["en-US", "fr-FR"])

    def test_langs_fall_back_to_locale(self):
        strategy = self.make(outputs={}, environ={"LANG": "it_IT.UTF-8"})
        self.assertEqual(strategy.langs(), ["it_IT.UTF-8"])

    def test_parse_apple_languages(self):
        self.assertEqual(parse_apple_languages('(\n    "zh-Hant-TW",\n    en\n)'), ["zh-Hant-TW", "en"])


if __name__ == "__main__":
    unittest.main()
