from tests.fakes.fake_clock import FakeClock
from tests.fakes.failing_search_index import FailingSearchIndex

__all__ = ["FakeClock", "FailingSearchIndex"]
