import random
import tempfile
import threading
import unittest
from datetime import datetime
from pathlib import Path

from fastapi.testclient import TestClient

from whattoeat.api.api_run import build_store, create_app
from whattoeat.events.Event_Bus import EventBus
from whattoeat.utilities.constants import MSG_EMPTY_LIST, MSG_EMPTY_NAME


class TestFoodsAPI(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        bus = EventBus()
        self.store = build_store(Path(self._tmp.name) / "storage.json",
                                 clock=lambda: datetime(2026, 10, 18, 12, 5, 9),
                                 rng=random.Random(3), event_bus=bus)
        self.app = create_app(self.store, event_bus=bus, tick_ms=0, settle_ms=0, cooldown_ms=0)
        self.client = TestClient(self.app)

    def tearDown(self):
        self._tmp.cleanup()

    def test_list_all_foods(self):
        resp = self.client.get('/api/foods')
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data['filter'], 'all')
        self.assertEqual(data['count'], 12)
        self.assertEqual(data['foods'][0], {'id': 1, 'name': '豆浆油条', 'tags': ['breakfast']})

    def test_list_by_tag(self):
        data = self.client.get('/api/foods', params={'tag': 'breakfast'}).json()
        self.assertEqual([f['id'] for f in data['foods']], [1, 2, 3, 4])
        self.assertEqual(data['total'], 12)

    def test_list_by_tag_is_case_insensitive(self):
        resp = self.client.get('/api/foods', params={'tag': 'Breakfast'})
        self.assertEqual(resp.status_code, 200, resp.text)
        data = resp.json()
        self.assertEqual(data['filter'], 'breakfast')
        self.assertEqual([f['id'] for f in data['foods']], [1, 2, 3, 4])

    def test_unknown_tag_is_rejected(self):
        resp = self.client.get('/api/foods', params={'tag': 'brunch'})
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(resp.json()['code'], 'invalid_tag')

    def test_add_food(self):
        resp = self.client.post('/api/foods', json={'name': ' 凉皮 ', 'tags': ['lunch']})
        self.assertEqual(resp.status_code, 201, resp.text)
        food = resp.json()['food']
        self.assertEqual(food, {'id': 13, 'name': '凉皮', 'tags': ['lunch']})
        self.assertEqual(len(self.store), 13)

    def test_add_food_without_tags_gets_all_periods(self):
        resp = self.client.post('/api/foods', json={'name': '馄饨'})
        self.assertEqual(resp.json()['food']['tags'], ['breakfast', 'lunch', 'dinner'])

    def test_add_empty_name(self):
        resp = self.client.post('/api/foods', json={'name': '   ', 'tags': []})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()['error'], MSG_EMPTY_NAME)
        self.assertEqual(len(self.store), 12)

    def test_add_unknown_tag(self):
        resp = self.client.post('/api/foods', json={'name': '下午茶', 'tags': ['teatime']})
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(len(self.store), 12)

    def test_delete_food(self):
        self.assertEqual(self.client.delete('/api/foods/5').status_code, 204)
        self.assertIsNone(self.store.get(5))
        # Unknown id is not an error
        self.assertEqual(self.client.delete('/api/foods/5').status_code, 204)
        self.assertEqual(len(self.store), 11)

    def test_filter_roundtrip(self):
        self.assertEqual(self.client.get('/api/filter').json(), {'filter': 'all'})
        resp = self.client.put('/api/filter', json={'filter': 'Dinner'})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['filter'], 'dinner')
        names = [f['name'] for f in self.client.get('/api/foods').json()['foods']]
        self.assertIn('火锅', names)
        self.assertNotIn('豆浆油条', names)
        self.assertEqual(self.client.put('/api/filter', json={'filter': 'snack'}).status_code, 422)

    def test_empty_list_message(self):
        for food in self.store.filter_by_tag('breakfast'):
            self.store.delete(food.id)
        data = self.client.get('/api/foods', params={'tag': 'breakfast'}).json()
        self.assertEqual(data['count'], 0)
        self.assertEqual(data['message'], MSG_EMPTY_LIST)

    def test_period_and_current_foods(self):
        period = self.client.get('/api/period').json()
        self.assertEqual(period, {
            'period': 'lunch',
            'label': '中餐时段',
            'time': '12:05:09',
            'text': '当前时间：12:05:09 | 中餐时段',
        })
        current = self.client.get('/api/foods/current').json()
        self.assertEqual(current['period'], 'lunch')
        self.assertEqual(current['count'], len(self.store.filter_by_tag('lunch')))

    def test_index_page(self):
        resp = self.client.get('/', params={'filter': 'dinner'})
        self.assertEqual(resp.status_code, 200)
        self.assertIn('当前时间：12:05:09', resp.text)
        self.assertIn('火锅', resp.text)
        self.assertNotIn('煎饼果子', resp.text)
        self.assertEqual(self.store.current_filter, 'dinner')

    def test_events_feed(self):
        self.client.post('/api/foods', json={'name': '凉皮', 'tags': ['lunch']})
        self.client.delete('/api/foods/13')
        data = self.client.get('/api/events').json()
        self.assertEqual([e['type'] for e in data['events']], ['food.added', 'food.deleted'])
        self.assertEqual(data['events'][0]['food']['name'], '凉皮')
        newer = self.client.get('/api/events', params={'since': data['next_cursor']}).json()
        self.assertEqual(newer['events'], [])

    def test_concurrent_posts_each_return_their_own_food(self):
        results = []

        def post_many(n):
            client = TestClient(self.app)
            for i in range(10):
                name = f'菜{n}-{i}'
                resp = client.post('/api/foods', json={'name': name, 'tags': ['lunch']})
                results.append((name, resp.status_code, resp.json()['food']))

        threads = [threading.Thread(target=post_many, args=(n,)) for n in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(results), 60)
        for name, status, food in results:
            self.assertEqual(status, 201)
            self.assertEqual(food['name'], name)
        ids = [food['id'] for _, _, food in results]
        self.assertEqual(sorted(ids), list(range(13, 73)))
        self.assertEqual(len(self.store), 72)


if __name__ == '__main__':
    unittest.main()
