"""Tests for versioning.py - VersionController."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lazylocale.versioning import VersionController


class TestVersionController:
    """Test version bumps."""

    def test_starts_at_initial(self) -> None:
        assert VersionController().version == 0
        assert VersionController(initial=7).version == 7

    def test_negative_initial_rejected(self) -> None:
        with pytest.raises(ValueError, match="initial version"):
            VersionController(initial=-1)

    def test_bump_returns_new_version(self) -> None:
        versions = VersionController()

        assert versions.bump() == 1
        assert versions.bump() == 2
        assert versions.version == 2

    def test_concurrent_bumps_are_distinct(self) -> None:
        versions = VersionController()

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: versions.bump(), range(200)))

        assert sorted(results) == list(range(1, 201))


class TestInvalidationSet:
    """Test invalidation_set ordering and deduplication."""

    def test_changed_modules_first(self) -> None:
        result = VersionController.invalidation_set(["app.counter"], ["lazylocale-virtual/it", "lazylocale-virtual/en"])

        assert result == ("app.counter", "lazylocale-virtual/it", "lazylocale-virtual/en")

    def test_duplicates_removed(self) -> None:
        result = VersionController.invalidation_set(["a", "a"], ["lazylocale-virtual/it", "a"])

        assert result == ("a", "lazylocale-virtual/it")

    @given(
        changed=st.lists(st.sampled_from(["a", "b", "c"])),
        regenerated=st.lists(st.sampled_from(["lazylocale-virtual/it", "lazylocale-virtual/en", "a"])),
    )
    def test_covers_every_input(self, changed: list[str], regenerated: list[str]) -> None:
        result = VersionController.invalidation_set(changed, regenerated)

        assert set(result) == set(changed) | set(regenerated)
        assert len(result) == len(set(result))
