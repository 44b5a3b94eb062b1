"""Unit tests for the ignore filter and the validation engine."""

from pathlib import Path

import pytest

from launchpd.api.exceptions import StaticContentError, ValidationError
from launchpd.core import ValidationEngine, is_ignored
from launchpd.core.validation_engine import is_forbidden


class TestIgnore:
    """Tests for the shared ignore predicate."""

    def test_ignored_directories(self):
        assert is_ignored("node_modules", is_directory=True)
        assert is_ignored(".git", is_directory=True)
        assert not is_ignored("assets", is_directory=True)

    def test_ignored_files(self):
        assert is_ignored(".DS_Store")
        assert is_ignored("README.md")
        assert is_ignored(".launchpd.json")
        assert not is_ignored("index.html")

    def test_file_named_like_ignored_directory(self):
        """A file called .env is skipped even though .env is a directory entry."""
        assert is_ignored(".env")

    def test_directory_does_not_match_file_set(self):
        assert not is_ignored("README.md", is_directory=True)


class TestForbidden:
    """Tests for forbidden name detection."""

    def test_forbidden_names_and_extensions(self):
        assert is_forbidden("package.json")
        assert is_forbidden("Makefile")
        assert is_forbidden("app.py")
        assert is_forbidden("App.TSX")

    def test_static_names(self):
        assert not is_forbidden("index.html")
        assert not is_forbidden("CNAME")
        assert not is_forbidden("data.json")


class TestStaticValidation:
    """Tests for ValidationEngine.validate_static_only."""

    @pytest.fixture
    def engine(self) -> ValidationEngine:
        return ValidationEngine()

    def _touch(self, root: Path, relative: str, content: str = "x") -> None:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

    def test_static_site_passes(self, engine: ValidationEngine, tmp_path: Path):
        for name in ["index.html", "css/site.css", "js/app.js", "img/logo.svg", "CNAME"]:
            self._touch(tmp_path, name)

        result = engine.validate_static_only(tmp_path)

        assert result.success
        assert result.violations == []
        assert "Only static content" in str(result)

    def test_reports_source_files(self, engine: ValidationEngine, tmp_path: Path):
        self._touch(tmp_path, "index.html")
        self._touch(tmp_path, "app.py")
        self._touch(tmp_path, "src/App.tsx")
        self._touch(tmp_path, "package.json")

        result = engine.validate_static_only(tmp_path)

        assert not result.success
        assert result.violations == ["app.py", "package.json", "src/App.tsx"]

    def test_nested_violations_keep_their_directory(self, engine: ValidationEngine, tmp_path: Path):
        self._touch(tmp_path, "index.html")
        self._touch(tmp_path, "api/handler.py")
        self._touch(tmp_path, "admin/api/handler.py")

        result = engine.validate_static_only(tmp_path)

        assert result.violations == ["admin/api/handler.py", "api/handler.py"]

    def test_unknown_extension_is_violation(self, engine: ValidationEngine, tmp_path: Path):
        self._touch(tmp_path, "index.html")
        self._touch(tmp_path, "blob.bin")

        result = engine.validate_static_only(tmp_path)

        assert result.violations == ["blob.bin"]

    def test_forbidden_directory_reported_once(self, engine: ValidationEngine, tmp_path: Path):
        self._touch(tmp_path, "index.html")
        self._touch(tmp_path, ".git/config")
        self._touch(tmp_path, ".git/hooks/pre-commit.py")

        result = engine.validate_static_only(tmp_path)

        assert result.violations == [".git"]

    def test_ignored_directory_not_descended(self, engine: ValidationEngine, tmp_path: Path):
        self._touch(tmp_path, "index.html")
        self._touch(tmp_path, "node_modules/lib/server.php")
        self._touch(tmp_path, "dist/bundle.ts")

        result = engine.validate_static_only(tmp_path)

        assert result.success

    def test_missing_folder_raises(self, engine: ValidationEngine, tmp_path: Path):
        with pytest.raises(ValidationError):
            engine.validate_static_only(tmp_path / "missing")


class TestSubdomainValidation:
    """Tests for ValidationEngine.validate_subdomain."""

    @pytest.mark.parametrize("name", ["my-site", "a", "site42", "a" * 63])
    def test_valid(self, name: str):
        assert ValidationEngine().validate_subdomain(name).is_valid

    @pytest.mark.parametrize("name", ["", "-site", "site-", "My_Site", "my.site", "a" * 64])
    def test_invalid(self, name: str):
        result = ValidationEngine().validate_subdomain(name)

        assert not result.is_valid
        assert result.errors


class TestStaticContentError:
    """Tests for the violation listing carried by StaticContentError."""

    def test_lists_at_most_ten(self):
        violations = [f"file{i}.py" for i in range(12)]

        error = StaticContentError(violations)

        listed = [s for s in error.suggestions if s.startswith("- ")]
        assert len(listed) == 11
        assert listed[-1] == "- ...and 2 more"
        assert error.violations == violations
        assert "Use --force to deploy anyway" in error.suggestions
