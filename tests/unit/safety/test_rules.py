"""Unit tests for the ordered path rule tables."""

from diskscope.safety.models import AssociationType
from diskscope.safety.rules import (
    APP_RULES,
    PathRule,
    app_name_under_root,
    contains_segment,
    split_segments,
)


class TestSplitSegments:
    """Tests for split_segments function."""

    def test_windows_path(self) -> None:
        """Backslash paths split into segments including the drive."""
        assert split_segments(r"C:\Users\me\file.txt") == ("C:", "Users", "me", "file.txt")

    def test_posix_path(self) -> None:
        """Slash paths drop the empty root segment."""
        assert split_segments("/home/me/file.txt") == ("home", "me", "file.txt")

    def test_mixed_and_repeated_separators(self) -> None:
        """Mixed and doubled separators collapse."""
        assert split_segments("C:/Users\\\\me//x") == ("C:", "Users", "me", "x")


class TestPathRule:
    """Tests for PathRule.matches."""

    def test_contiguous_segments(self) -> None:
        """Multi-segment rules need the segments next to each other."""
        rule = PathRule(("Google", "Chrome"), "Google Chrome", AssociationType.APP_DATA)

        assert rule.matches(("c:", "users", "x", "google", "chrome", "user data")) is True
        assert rule.matches(("c:", "google", "other", "chrome")) is False

    def test_anchored_rule(self) -> None:
        """Anchored rules match only at the filesystem root."""
        rule = PathRule(("usr",), "Operating System", AssociationType.SYSTEM, anchored=True)

        assert rule.matches(("usr", "lib")) is True
        assert rule.matches(("home", "me", "usr")) is False

    def test_anchored_rule_ignores_drive(self) -> None:
        """A leading drive segment does not break anchoring."""
        rule = PathRule(("opt",), "Installed App", AssociationType.INSTALLED, anchored=True)
        assert rule.matches(("d:", "opt", "tool")) is True

    def test_rule_longer_than_path(self) -> None:
        """A rule with more segments than the path never matches."""
        rule = PathRule((".local", "share", "flatpak"), "Flatpak", AssociationType.INSTALLED)
        assert rule.matches((".local",)) is False


class TestRuleOrder:
    """Tests for the order of APP_RULES."""

    def test_browser_rules_precede_system_rules(self) -> None:
        """Browser locations are checked before generic Windows locations."""
        names = [rule.app_name for rule in APP_RULES]
        assert names.index("Google Chrome") < names.index("Windows System")

    def test_program_files_precedes_x86_variant(self) -> None:
        """The 64-bit install location is listed first."""
        names = [rule.app_name for rule in APP_RULES]
        assert names.index("Installed App") < names.index("Installed App (32-bit)")


class TestHelpers:
    """Tests for contains_segment and app_name_under_root."""

    def test_contains_segment_is_case_insensitive(self) -> None:
        """Names are compared casefolded."""
        assert contains_segment(("home", "me", "downloads"), ("Downloads",)) is True
        assert contains_segment(("home", "me", "downloaded"), ("Downloads",)) is False

    def test_app_name_under_root(self) -> None:
        """The segment directly below the root is returned."""
        segments = split_segments(r"C:\Users\X\AppData\Roaming\Foo\bar\baz.json")
        assert app_name_under_root(segments, r"C:\Users\X\AppData\Roaming") == "Foo"

    def test_app_name_under_root_case_and_separator(self) -> None:
        """Root comparison ignores case and separator style."""
        segments = split_segments("/home/me/.config/Editor/settings.json")
        assert app_name_under_root(segments, "/HOME/me/.config/") == "Editor"

    def test_path_equal_to_root(self) -> None:
        """The root itself has no application segment."""
        segments = split_segments("/home/me/.config")
        assert app_name_under_root(segments, "/home/me/.config") is None

    def test_path_outside_root(self) -> None:
        """Paths elsewhere are not attributed."""
        segments = split_segments("/srv/data/file")
        assert app_name_under_root(segments, "/home/me/.config") is None
