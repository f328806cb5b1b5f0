"""Pytest configuration and fixtures for boardpm tests.

The `pm` fixture is a PackageManager holding a small registry modelled on a
typical installation:

    arduino (package)
      avr   1.6.20, 1.6.21 (installed): uno, nano, leonardo
            depends on avr-gcc 4.9.2-atmel3.5.4-arduino2, avrdude 6.3.0-arduino14
      samd  1.6.19 (not installed): mkr1000
      tools avr-gcc 4.9.2-atmel3.5.4-arduino2 (inst), 5.4.0-atmel3.6.1-arduino2 (inst),
                    7.3.0-atmel3.6.1-arduino5
            avrdude 6.3.0-arduino14 (inst), 6.3.0-arduino17 (inst)
            bossac 1.7.0 (inst)
    attiny (package)
      avr   1.0.2 (installed): uno, attinyx5   (no declared dependencies)
"""

from pathlib import Path

import pytest

from boardpm.cores.models import ToolDependency
from boardpm.packagemanager import PackageManager


def populate_registry(pm: PackageManager, root: Path) -> None:
    """Fill a package manager with the registry described in the module docstring."""
    packages = pm.get_packages()

    arduino = packages.get_or_create_package("arduino")
    arduino.maintainer = "Arduino"

    avr = arduino.get_or_create_platform("avr")
    avr.name = "Arduino AVR Boards"
    avr.get_or_create_release("1.6.20")
    avr_release = avr.get_or_create_release("1.6.21")
    avr_release.dependencies = [
        ToolDependency("arduino", "avr-gcc", "4.9.2-atmel3.5.4-arduino2"),
        ToolDependency("arduino", "avrdude", "6.3.0-arduino14"),
    ]
    avr.install("1.6.21", root / "arduino" / "hardware" / "avr" / "1.6.21")
    avr_release.add_board(
        "uno",
        {"name": "Arduino/Genuino Uno", "vid.0": "0x2341", "pid.0": "0x0043", "vid.1": "0x2A03", "pid.1": "0x0043"},
    )
    avr_release.add_board("nano", {"name": "Arduino Nano"})
    avr_release.add_board("leonardo", {"name": "Arduino Leonardo", "vid.0": "0x2341", "pid.0": "0x8036"})

    samd = arduino.get_or_create_platform("samd")
    samd_release = samd.get_or_create_release("1.6.19")
    samd_release.add_board("mkr1000", {"name": "Arduino MKR1000", "vid.0": "0x2341", "pid.0": "0x804e"})

    tool_releases = {
        "avr-gcc": {"4.9.2-atmel3.5.4-arduino2": True, "5.4.0-atmel3.6.1-arduino2": True, "7.3.0-atmel3.6.1-arduino5": False},
        "avrdude": {"6.3.0-arduino14": True, "6.3.0-arduino17": True},
        "bossac": {"1.7.0": True},
    }
    for tool_name, versions in tool_releases.items():
        tool = arduino.get_or_create_tool(tool_name)
        for version, installed in versions.items():
            release = tool.get_or_create_release(version)
            if installed:
                release.install(root / "arduino" / "tools" / tool_name / version)

    attiny = packages.get_or_create_package("attiny")
    attiny_avr = attiny.get_or_create_platform("avr")
    attiny_release = attiny_avr.get_or_create_release("1.0.2")
    attiny_avr.install("1.0.2", root / "attiny" / "hardware" / "avr" / "1.0.2")
    attiny_release.add_board("uno", {"name": "Uno (ATtiny programmer)", "vid.0": "0x2341", "pid.0": "0x0043"})
    attiny_release.add_board("attinyx5", {"name": "ATtiny25/45/85"})


@pytest.fixture
def pm(tmp_path: Path) -> PackageManager:
    """PackageManager with the sample registry installed under tmp_path."""
    manager = PackageManager()
    populate_registry(manager, tmp_path)
    return manager


@pytest.fixture
def empty_pm() -> PackageManager:
    """PackageManager with an empty registry."""
    return PackageManager()
