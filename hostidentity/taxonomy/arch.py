"""
CPU architecture families and their address width.
"""

from dataclasses import dataclass
from enum import Enum

from hostidentity.exceptions.exceptions import AbsentError
from hostidentity.taxonomy.base import Rule, Taxon, classify


class Width(Enum):
    """Address width of a CPU architecture."""

    BITS32 = 32
    BITS64 = 64

    def __str__(self) -> str:
        return f"{self.value} bits"


@dataclass(frozen=True, repr=False)
class Arch(Taxon):
    """CPU architecture."""

    def width(self) -> Width:
        """
        Address width of this architecture.

        Raises:
            AbsentError: The architecture is not recognized.
        """
        if self.is_unknown:
            raise AbsentError(
                message=f"Address width of {self.label!r} is not known.",
                step="arch",
                source=self.label,
            )
        return Width.BITS64 if self.key in WIDE_ARCHES else Width.BITS32


Arch.ARM64 = Arch("Arm64", "arm64")
Arch.ARMV5 = Arch("Armv5", "armv5")
Arch.ARMV6 = Arch("Armv6", "armv6")
Arch.ARMV7 = Arch("Armv7", "armv7")
Arch.I386 = Arch("I386", "i386")
Arch.I586 = Arch("I586", "i586")
Arch.I686 = Arch("I686", "i686")
Arch.MIPS = Arch("Mips", "mips")
Arch.MIPS_EL = Arch("MipsEl", "mipsel")
Arch.MIPS64 = Arch("Mips64", "mips64")
Arch.MIPS64_EL = Arch("Mips64El", "mips64el")
Arch.POWERPC = Arch("PowerPc", "powerpc")
Arch.POWERPC64 = Arch("PowerPc64", "powerpc64")
Arch.POWERPC64_LE = Arch("PowerPc64Le", "powerpc64le")
Arch.RISCV32 = Arch("Riscv32", "riscv32")
Arch.RISCV64 = Arch("Riscv64", "riscv64")
Arch.S390X = Arch("S390x", "s390x")
Arch.SPARC = Arch("Sparc", "sparc")
Arch.SPARC64 = Arch("Sparc64", "sparc64")
Arch.WASM32 = Arch("Wasm32", "wasm32")
Arch.WASM64 = Arch("Wasm64", "wasm64")
Arch.X64 = Arch("X64", "x86_64")

WIDE_ARCHES = frozenset(
    {
        "Arm64",
        "Mips64",
        "Mips64El",
        "PowerPc64",
        "PowerPc64Le",
        "Riscv64",
        "S390x",
        "Sparc64",
        "Wasm64",
        "X64",
    }
)

# Exact names first, then the armvN families that carry suffixes (armv7l).
ARCH_RULES = (
    Rule(Arch.X64, equals=("x86_64", "amd64", "x64", "em64t")),
    Rule(Arch.I686, equals=("i686", "x86", "i86pc")),
    Rule(Arch.I586, equals=("i586",)),
    Rule(Arch.I386, equals=("i386", "i486")),
    Rule(Arch.ARM64, equals=("aarch64", "arm64", "aarch64_be", "armv8", "armv8l")),
    Rule(Arch.MIPS, equals=("mips",)),
    Rule(Arch.MIPS_EL, equals=("mipsel",)),
    Rule(Arch.MIPS64, equals=("mips64",)),
    Rule(Arch.MIPS64_EL, equals=("mips64el",)),
    Rule(Arch.POWERPC, equals=("powerpc", "ppc")),
    Rule(Arch.POWERPC64, equals=("powerpc64", "ppc64")),
    Rule(Arch.POWERPC64_LE, equals=("powerpc64le", "ppc64le")),
    Rule(Arch.RISCV32, equals=("riscv32",)),
    Rule(Arch.RISCV64, equals=("riscv64",)),
    Rule(Arch.S390X, equals=("s390x",)),
    Rule(Arch.SPARC, equals=("sparc", "sun4m")),
    Rule(Arch.SPARC64, equals=("sparc64", "sun4u", "sun4v")),
    Rule(Arch.WASM32, equals=("wasm32",)),
    Rule(Arch.WASM64, equals=("wasm64",)),
    Rule(Arch.ARMV5, prefixes=("armv5",)),
    Rule(Arch.ARMV6, prefixes=("armv6",)),
    Rule(Arch.ARMV7, prefixes=("armv7",)),
)


def classify_arch(machine: str) -> Arch:
    """Classify a machine name such as ``uname -m`` output or ``PROCESSOR_ARCHITECTURE``."""
    return classify(machine, ARCH_RULES, Arch)
