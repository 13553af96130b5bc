import pytest

from spacetools.tfetch import MIN_VALID_TIMESTAMP, TimeFetcher

GOOD_TIME = (MIN_VALID_TIMESTAMP + 1000, 500)


class _Remote:
    def __init__(self, answers):
        self.answers = answers
        self.calls = []

    def __call__(self, node, timeout):
        self.calls.append((node, timeout))
        answer = self.answers.get(node)
        if isinstance(answer, Exception):
            raise answer
        return answer


class _Clock:
    def __init__(self, result=True):
        self.result = result
        self.calls = []

    def __call__(self, seconds, nanoseconds):
        self.calls.append((seconds, nanoseconds))
        return self.result


def test_node_zero_is_disabled():
    remote = _Remote({})
    fetcher = TimeFetcher(remote, _Clock())
    assert fetcher.fetch(0, 50) == 0
    assert remote.calls == []
    assert fetcher.errors == 0


def test_default_timeout_applied():
    remote = _Remote({7: GOOD_TIME})
    fetcher = TimeFetcher(remote, _Clock())
    assert fetcher.fetch(7, 0) == 7
    assert remote.calls == [(7, 100)]


def test_successful_fetch_sets_clock():
    clock = _Clock()
    fetcher = TimeFetcher(_Remote({3: GOOD_TIME}), clock)
    assert fetcher.fetch(3, 200) == 3
    assert clock.calls == [GOOD_TIME]
    assert fetcher.errors == 0


@pytest.mark.parametrize("answer", [None, TimeoutError("no reply")])
def test_no_response_counts_error(answer):
    fetcher = TimeFetcher(_Remote({3: answer}), _Clock())
    assert fetcher.fetch(3, 10) == 0
    assert fetcher.errors == 1


def test_timestamp_before_2020_rejected():
    clock = _Clock()
    fetcher = TimeFetcher(_Remote({3: (MIN_VALID_TIMESTAMP - 1, 0)}), clock)
    assert fetcher.fetch(3, 10) == 0
    assert fetcher.errors == 1
    assert clock.calls == []


def test_clock_set_failure_counts_error_and_remembers_time():
    fetcher = TimeFetcher(_Remote({3: GOOD_TIME}), _Clock(result=False))
    assert fetcher.fetch(3, 10) == 0
    assert fetcher.errors == 1
    assert fetcher.last_s == GOOD_TIME[0]


def test_error_counter_wraps_at_16_bits():
    fetcher = TimeFetcher(_Remote({3: None}), _Clock())
    fetcher.errors = 0xFFFF
    fetcher.fetch(3, 10)
    assert fetcher.errors == 0


def test_onehz_falls_back_to_secondary():
    remote = _Remote({1: None, 2: GOOD_TIME})
    fetcher = TimeFetcher(remote, _Clock(), primary=1, secondary=2, timeout=30)
    assert fetcher.onehz() == 2
    assert fetcher.synced == 2
    assert remote.calls == [(1, 30), (2, 30)]


def test_onehz_stops_after_sync():
    remote = _Remote({1: GOOD_TIME})
    fetcher = TimeFetcher(remote, _Clock(), primary=1, secondary=2)
    assert fetcher.onehz() == 1
    assert fetcher.onehz() == 1
    assert remote.calls == [(1, 100)]


def test_onehz_retries_until_synced():
    remote = _Remote({1: None, 2: None})
    fetcher = TimeFetcher(remote, _Clock(), primary=1, secondary=2)
    assert fetcher.onehz() == 0
    assert fetcher.onehz() == 0
    assert fetcher.errors == 4
    remote.answers[1] = GOOD_TIME
    assert fetcher.onehz() == 1