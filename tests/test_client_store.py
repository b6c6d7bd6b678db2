"""Client view-state reconciliation against pushed log events."""
import pytest

from client.store import MoodStore


def point(log_id, date, mood=3, **extra):
    p = {
        'id': log_id, 'date': date, 'formattedDate': 'Oct 18',
        'mood': mood, 'anxiety': 3, 'stressLevel': 0,
        'sleepHours': None, 'sleepQuality': None, 'sleepDisturbances': None,
        'physicalActivity': 'none', 'activityDuration': None, 'socialInteractions': None,
        'depressionSymptoms': 'none', 'anxietySymptoms': 'none', 'notes': None,
    }
    p.update(extra)
    return p


def record(log_id, date, mood=3, **extra):
    r = {'id': log_id, 'userId': 'u1', 'date': date, 'mood': mood, 'anxiety': 3}
    r.update(extra)
    return r


class FakeFetcher:
    def __init__(self, responses=None):
        self.calls = []
        self.responses = responses or {}

    def __call__(self, kind):
        self.calls.append(kind)
        result = self.responses.get(kind, [])
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def fetcher():
    return FakeFetcher({
        'weekly': [point('a', '2026-10-18')],
        'monthly': [point('b', '2026-10-02'), point('a', '2026-10-18')],
    })


def test_on_connect_fetches_active_window(fetcher):
    store = MoodStore(fetcher)
    store.on_connect()

    assert fetcher.calls == ['weekly']
    assert store.chart_data == fetcher.responses['weekly']
    assert store.cache['weekly'] == fetcher.responses['weekly']
    assert store.loading is False


def test_select_window_fetches_when_slot_empty_then_uses_cache(fetcher):
    store = MoodStore(fetcher)
    store.on_connect()

    assert store.select_window('monthly') is True
    assert store.chart_data == fetcher.responses['monthly']

    assert store.select_window('weekly') is False
    assert store.select_window('monthly') is False
    assert fetcher.calls == ['weekly', 'monthly']
    assert store.chart_data == fetcher.responses['monthly']


def test_select_unknown_window(fetcher):
    store = MoodStore(fetcher)
    with pytest.raises(ValueError):
        store.select_window('yearly')


def test_pushed_views_replace_cache_without_merging(fetcher):
    store = MoodStore(fetcher)
    store.on_connect()
    store.cache['monthly'] = [point('old', '2026-10-01')]

    new_weekly = [point('a', '2026-10-18', mood=5, notes='edited')]
    new_monthly = [point('a', '2026-10-18', mood=5, notes='edited')]
    store.apply_notification({
        'kind': 'updated',
        'updatedLog': record('a', '2026-10-18', mood=5, notes='edited'),
        'summaryData': {'weekly': new_weekly, 'monthly': new_monthly},
    })

    assert store.chart_data == new_weekly
    assert store.cache == {'weekly': new_weekly, 'monthly': new_monthly}
    assert fetcher.calls == ['weekly']


def test_pushed_views_follow_the_active_window(fetcher):
    store = MoodStore(fetcher, active_window='monthly')
    monthly = [point('b', '2026-10-02'), point('c', '2026-10-20')]
    store.apply_notification({
        'kind': 'created',
        'newLog': record('c', '2026-10-20'),
        'summaryData': {'weekly': [point('c', '2026-10-20')], 'monthly': monthly},
    })

    assert store.chart_data == monthly
    assert fetcher.calls == []


def test_event_without_views_refetches_active_window(fetcher):
    store = MoodStore(fetcher)
    store.cache['weekly'] = [point('stale', '2026-10-18')]
    store.apply_notification({'kind': 'deleted', 'deletedLogId': 'stale', 'summaryData': None})

    assert fetcher.calls == ['weekly']
    assert store.chart_data == fetcher.responses['weekly']


def test_malformed_event_refetches(fetcher):
    store = MoodStore(fetcher)
    store.apply_notification({'kind': 'archived'})
    store.apply_notification({'kind': 'updated', 'summaryData': None})

    assert fetcher.calls == ['weekly', 'weekly']


def test_failed_fetch_keeps_previous_view():
    fetcher = FakeFetcher({'weekly': [point('a', '2026-10-18')]})
    store = MoodStore(fetcher)
    store.on_connect()

    fetcher.responses['weekly'] = ConnectionError('offline')
    store.fetch()

    assert store.chart_data == [point('a', '2026-10-18')]
    assert store.loading is False


def test_fetch_overtaken_by_pushed_views_is_discarded():
    store = MoodStore(None)
    calls = []

    def fetcher(kind):
        calls.append(kind)
        # The event lands while the request is still in flight
        store.apply_notification({
            'kind': 'deleted',
            'deletedLogId': 'stale',
            'summaryData': {'weekly': [], 'monthly': []},
        })
        return [point('stale', '2026-10-18')]

    store.fetcher = fetcher
    store.on_connect()

    assert calls == ['weekly']
    assert store.chart_data == []
    assert store.cache == {'weekly': [], 'monthly': []}
    assert store.loading is False
