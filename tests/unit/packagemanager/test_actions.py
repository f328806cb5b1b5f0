"""Unit tests for the Package -> Tool -> Release resolution chain."""

import pytest

from boardpm.errors import NotFoundError, PackageNotFoundError, ReleaseNotFoundError, ToolNotFoundError
from boardpm.packagemanager.actions import PackageActions, ToolActions, ToolReleaseActions


class TestPackageLookup:
    """Tests for PackageManager.package()."""

    def test_existing_package(self, pm):
        package = pm.package("arduino").get()
        assert package is pm.get_packages().get("arduino")

    def test_missing_package(self, pm):
        with pytest.raises(PackageNotFoundError, match="package 'missing' not found"):
            pm.package("missing").get()

    def test_missing_package_error_is_not_found(self, pm):
        with pytest.raises(NotFoundError):
            pm.package("missing").get()

    def test_handle_exposes_error(self, pm):
        assert pm.package("arduino").error is None
        assert isinstance(pm.package("missing").error, PackageNotFoundError)


class TestToolLookup:
    """Tests for PackageActions.tool()."""

    def test_existing_tool(self, pm):
        tool = pm.package("arduino").tool("avrdude").get()
        assert str(tool) == "arduino:avrdude"

    def test_missing_tool(self, pm):
        with pytest.raises(ToolNotFoundError, match="tool 'openocd' not found in package 'arduino'"):
            pm.package("arduino").tool("openocd").get()

    def test_missing_package_forwarded(self, pm):
        with pytest.raises(PackageNotFoundError, match="package 'missing' not found"):
            pm.package("missing").tool("avrdude").get()


class TestReleaseLookup:
    """Tests for ToolActions.release()."""

    def test_existing_release(self, pm):
        release = pm.package("arduino").tool("avr-gcc").release("5.4.0-atmel3.6.1-arduino2").get()
        expected = pm.get_packages().get("arduino").tools["avr-gcc"].releases["5.4.0-atmel3.6.1-arduino2"]
        assert release is expected

    def test_release_that_is_not_installed_is_still_found(self, pm):
        release = pm.package("arduino").tool("avr-gcc").release("7.3.0-atmel3.6.1-arduino5").get()
        assert not release.is_installed

    def test_missing_release(self, pm):
        with pytest.raises(ReleaseNotFoundError, match="release '9.9.9' not found for tool 'arduino:avr-gcc'"):
            pm.package("arduino").tool("avr-gcc").release("9.9.9").get()

    def test_missing_tool_forwarded(self, pm):
        with pytest.raises(ToolNotFoundError):
            pm.package("arduino").tool("openocd").release("1.0").get()

    def test_first_error_is_forwarded_unchanged(self, pm):
        """The error of the first failing stage reaches get() as the same object."""
        package_actions = pm.package("missing")
        release_actions = package_actions.tool("avr-gcc").release("1.0")
        assert release_actions.error is package_actions.error
        with pytest.raises(PackageNotFoundError) as exc_info:
            release_actions.get()
        assert exc_info.value is package_actions.error


class TestIsInstalled:
    """Tests for ToolActions.is_installed()."""

    def test_installed_tool(self, pm):
        assert pm.package("arduino").tool("bossac").is_installed() is True

    def test_tool_without_installed_release(self, pm):
        tool = pm.get_packages().get("arduino").get_or_create_tool("openocd")
        tool.get_or_create_release("0.10.0")
        assert pm.package("arduino").tool("openocd").is_installed() is False

    def test_error_is_forwarded(self, pm):
        with pytest.raises(ToolNotFoundError):
            pm.package("arduino").tool("openocd").is_installed()
        with pytest.raises(PackageNotFoundError):
            pm.package("missing").tool("bossac").is_installed()


class TestAnyRegistry:
    """The chain resolves whatever the registry holds."""

    @pytest.mark.parametrize(
        "package,tool,version",
        [
            ("vendor", "gcc", "1.0.0"),
            ("esp32", "xtensa-esp32-elf-gcc", "1.22.0-80-g6c4433a-5.2.0"),
            ("my-pkg", "my_tool", "0.0.1-rc.1+build"),
        ],
    )
    def test_resolves_exact_release(self, empty_pm, package, tool, version):
        release = empty_pm.get_packages().get_or_create_package(package).get_or_create_tool(tool).get_or_create_release(version)
        assert empty_pm.package(package).tool(tool).release(version).get() is release


class TestHandleConstruction:
    """A handle always holds an entity or an error."""

    @pytest.mark.parametrize("handle_class", [PackageActions, ToolActions, ToolReleaseActions])
    def test_empty_handle_rejected(self, handle_class):
        with pytest.raises(ValueError, match="forward_error is required"):
            handle_class(None)

    def test_failed_handle_raises_without_entity(self):
        error = PackageNotFoundError("missing")
        handle = PackageActions(None, error)
        with pytest.raises(PackageNotFoundError) as excinfo:
            handle.tool("gcc").release("1.0.0").get()
        assert excinfo.value is error
