"""
Desktop environments and the GTK / KDE capability predicates.

Classification accepts the raw values of ``$XDG_CURRENT_DESKTOP`` (which may
be a colon separated list such as ``ubuntu:GNOME``), ``$DESKTOP_SESSION`` and
``$XDG_SESSION_DESKTOP``.
"""

from dataclasses import dataclass

from hostidentity.taxonomy.base import Rule, Taxon, classify


@dataclass(frozen=True, repr=False)
class DesktopEnv(Taxon):
    """Desktop environment of the current session."""

    def is_gtk(self) -> bool:
        """True for desktops built on GTK."""
        return self.key in GTK_DESKTOPS

    def is_kde(self) -> bool:
        """True for KDE Plasma."""
        return self.key in KDE_DESKTOPS


DesktopEnv.GNOME = DesktopEnv("Gnome", "Gnome")
DesktopEnv.WINDOWS = DesktopEnv("Windows", "Windows")
DesktopEnv.LXDE = DesktopEnv("Lxde", "LXDE")
DesktopEnv.OPENBOX = DesktopEnv("Openbox", "Openbox")
DesktopEnv.MATE = DesktopEnv("Mate", "Mate")
DesktopEnv.XFCE = DesktopEnv("Xfce", "XFCE")
DesktopEnv.KDE = DesktopEnv("Kde", "KDE")
DesktopEnv.CINNAMON = DesktopEnv("Cinnamon", "Cinnamon")
DesktopEnv.I3 = DesktopEnv("I3", "I3")
DesktopEnv.AQUA = DesktopEnv("Aqua", "Aqua")
DesktopEnv.IOS = DesktopEnv("Ios", "IOS")
DesktopEnv.ANDROID = DesktopEnv("Android", "Android")
DesktopEnv.WEB_BROWSER = DesktopEnv("WebBrowser", "Web Browser")
DesktopEnv.CONSOLE = DesktopEnv("Console", "Console")
DesktopEnv.UBUNTU = DesktopEnv("Ubuntu", "Ubuntu")
DesktopEnv.ERMINE = DesktopEnv("Ermine", "Ermine")
DesktopEnv.ORBITAL = DesktopEnv("Orbital", "Orbital")

GTK_DESKTOPS = frozenset({"Gnome", "Ubuntu", "Cinnamon", "Lxde", "Mate", "Xfce"})
KDE_DESKTOPS = frozenset({"Kde"})

# Order matters: "X-Cinnamon" and "ubuntu:GNOME" must not fall through to a
# later, looser rule.
DESKTOP_RULES = (
    Rule(DesktopEnv.GNOME, contains=("gnome",)),
    Rule(DesktopEnv.CINNAMON, contains=("cinnamon",)),
    Rule(DesktopEnv.MATE, equals=("mate",)),
    Rule(DesktopEnv.XFCE, contains=("xfce",)),
    Rule(DesktopEnv.KDE, contains=("kde", "plasma")),
    Rule(DesktopEnv.LXDE, contains=("lxde",)),
    Rule(DesktopEnv.OPENBOX, contains=("openbox",)),
    Rule(DesktopEnv.I3, equals=("i3",), prefixes=("i3:", "i3-", "i3wm")),
    Rule(DesktopEnv.UBUNTU, contains=("unity", "ubuntu")),
    Rule(DesktopEnv.AQUA, equals=("aqua",)),
    Rule(DesktopEnv.WINDOWS, equals=("windows",)),
    Rule(DesktopEnv.ORBITAL, equals=("orbital",)),
    Rule(DesktopEnv.ERMINE, equals=("ermine",)),
    Rule(DesktopEnv.CONSOLE, equals=("console", "tty")),
)


def classify_desktop(name: str) -> DesktopEnv:
    """Classify a desktop environment name; unmatched names are remembered as Unknown."""
    return classify(name, DESKTOP_RULES, DesktopEnv)
