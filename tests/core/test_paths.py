"""
Tests for output path resolution
"""

import pytest

from core.exceptions import PathResolutionError
from core.paths import resolve_path


class TestResolvePath:
    """Test resolve_path functionality"""

    def test_relative_path_with_suffix(self):
        """Test new relative path with suffix"""
        assert resolve_path("./foo.jpg", prefix="", suffix="-bar") == "foo-bar.jpg"

    def test_relative_path_with_format(self):
        """Test new relative path with custom format"""
        assert resolve_path("./foo.jpg", prefix="", suffix="-bar", format="png") == "foo-bar.png"

    def test_absolute_path_with_suffix(self):
        """Test new absolute path with suffix"""
        assert resolve_path("/foo/bar/baz.jpg", suffix="-bix") == "/foo/bar/baz-bix.jpg"

    def test_absolute_path_with_format(self):
        """Test new absolute path with custom format"""
        assert resolve_path("/foo/bar/baz.jpg", suffix="-bix", format="png") == "/foo/bar/baz-bix.png"

    def test_prefix(self):
        """Test new path with prefix"""
        assert resolve_path("/foo/bar/baz.jpg", prefix="prefix-", suffix="") == "/foo/bar/prefix-baz.jpg"

    def test_directory_override(self):
        """Test new path with custom directory"""
        assert resolve_path("/foo/bar/baz.jpg", prefix="im-", path="/tmp") == "/tmp/im-baz.jpg"

    def test_relative_directory_override(self):
        """Test override directory is used as given"""
        assert resolve_path("/foo/bar/baz.jpg", suffix="-x", path="out") == "out/baz-x.jpg"

    def test_format_with_leading_dot(self):
        assert resolve_path("a/b.jpg", suffix="-c", format=".webp") == "a/b-c.webp"

    def test_nested_relative_directory_is_kept(self):
        assert resolve_path("./assets/horizontal.jpg", suffix="-full") == "assets/horizontal-full.jpg"

    def test_only_last_extension_replaced(self):
        assert resolve_path("/x/archive.tar.gz", suffix="-1", format="bz2") == "/x/archive.tar-1.bz2"

    def test_windows_style_path(self):
        """Test backslash paths keep their separator"""
        assert resolve_path("C:\\img\\a.jpg", suffix="-x") == "C:\\img\\a-x.jpg"

    @pytest.mark.parametrize(
        "source",
        ["/foo/bar/baz.jpg", "foo/baz.jpg", "./baz.jpg", "/baz.png", "../up/baz.gif"],
    )
    def test_absolute_or_relative_preserved(self, source):
        """Test resolved path keeps the absolute/relative nature of the source"""
        resolved = resolve_path(source, prefix="p-", suffix="-s")
        assert resolved.startswith("/") == source.startswith("/")

    @pytest.mark.parametrize("source", ["", "   ", "/foo/bar/baz", "foo/", ".jpg"])
    def test_malformed_path(self, source):
        """Test paths without basename or extension are rejected"""
        with pytest.raises(PathResolutionError):
            resolve_path(source, suffix="-x")

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            resolve_path("noext", suffix="-x")
