"""Tests for whisker.resolve.names — candidate filename generation."""

from whisker.resolve.names import build_candidate_names


class TestBuildCandidateNames:
    """Most specific first: slug-name, name, slug."""

    def test_slug_and_name(self) -> None:
        assert build_candidate_names("order", "pending", extension=".py") == (
            "order-pending.py",
            "pending.py",
            "order.py",
        )

    def test_slug_only(self) -> None:
        assert build_candidate_names("order", extension=".py") == ("order.py",)

    def test_empty_name_skips_name_only_candidate(self) -> None:
        """No bare '.py' candidate when name is empty."""
        names = build_candidate_names("order", "", extension=".py")
        assert names == ("order.py",)
        assert ".py" not in names

    def test_other_extension(self) -> None:
        assert build_candidate_names("nav", "main", extension=".html") == (
            "nav-main.html",
            "main.html",
            "nav.html",
        )

    def test_no_extension(self) -> None:
        assert build_candidate_names("README", extension="") == ("README",)
