import json
import unittest
import httpx
from kitchen.infra.inventory_client import InventoryAPIError, InventoryClient
from kitchen.utilities.validators import WasteEventInput


class TestInventoryClient(unittest.TestCase):

    def setUp(self):
        self.requests = []

    def _client(self, handler, token="secret"):
        def record(request):
            self.requests.append(request)
            return handler(request)
        return InventoryClient(base_url="http://inventory.test", token=token, transport=httpx.MockTransport(record))

    def test_get_stock_items_sends_bearer_token(self):
        payload = [{'id': 1, 'name': 'Pan', 'currentStock': 3}]
        with self._client(lambda r: httpx.Response(200, json=payload)) as client:
            self.assertEqual(client.get_stock_items(), payload)
        request = self.requests[0]
        self.assertEqual(request.url.path, '/api/stock')
        self.assertEqual(request.headers['Authorization'], 'Bearer secret')

    def test_no_token_no_header(self):
        with self._client(lambda r: httpx.Response(200, json=[]), token="") as client:
            client.get_all_waste()
        self.assertNotIn('Authorization', self.requests[0].headers)

    def test_waste_by_ingredient_path(self):
        with self._client(lambda r: httpx.Response(200, json=[])) as client:
            self.assertEqual(client.get_waste_by_ingredient(12), [])
        self.assertEqual(self.requests[0].url.path, '/api/waste/ingredient/12')

    def test_register_waste_posts_camel_case(self):
        waste = WasteEventInput(ingredientId=4, quantity=2, reason='merma')
        with self._client(lambda r: httpx.Response(201, json={'id': 99})) as client:
            self.assertEqual(client.register_waste(waste), {'id': 99})
        body = json.loads(self.requests[0].content)
        self.assertEqual(body['ingredientId'], 4)
        self.assertEqual(body['reason'], 'merma')
        self.assertEqual(self.requests[0].method, 'POST')

    def test_error_status_raises(self):
        with self._client(lambda r: httpx.Response(401, text='unauthorized')) as client:
            with self.assertRaises(InventoryAPIError) as ctx:
                client.get_all_waste()
        self.assertEqual(ctx.exception.status_code, 401)

    def test_transport_error_raises(self):
        def boom(request):
            raise httpx.ConnectError("connection refused", request=request)
        with self._client(boom) as client:
            with self.assertRaises(InventoryAPIError) as ctx:
                client.get_stock_items()
        self.assertIsNone(ctx.exception.status_code)


if __name__ == '__main__':
    unittest.main()
