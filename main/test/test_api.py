"""
Integration tests for GraphQL API.
"""
import json
from uuid import uuid4

from django.test import TestCase

from main.infra.models import IdempotencyKey, OrderORM
from main.test.base import MarketplaceTestMixin

PLACE_ORDER = """
    mutation PlaceOrder($input: PlaceOrderInput!) {
        placeOrder(input: $input) {
            id
            orderNumber
            orderStatus
            paymentStatus
            totalAmount
            shipping { city zipCode }
            items { productId quantity unitPrice subtotal }
        }
    }
"""


class GraphQLAPITest(MarketplaceTestMixin, TestCase):
    """Integration tests for GraphQL API."""

    def setUp(self):
        self.user_id = self.create_user()
        self.product = self.create_product(price="5.00", stock=10)

    def post(self, query, variables=None, **headers):
        response = self.client.post(
            "/graphql/",
            data={"query": query, "variables": variables or {}},
            content_type="application/json",
            **headers,
        )
        return response, json.loads(response.content)

    def order_input(self, quantity=2, product_id=None):
        return {
            "input": {
                "userId": str(self.user_id),
                "paymentMethod": "card",
                "shipping": {
                    "address": "12 Market Street",
                    "city": "Colombo",
                    "state": "Western",
                    "zipCode": "00100",
                    "country": "Sri Lanka",
                },
                "items": [
                    {"productId": str(product_id or self.product.id), "quantity": quantity},
                ],
            }
        }

    def test_place_order_mutation(self):
        response, data = self.post(PLACE_ORDER, self.order_input())

        self.assertEqual(response.status_code, 200)
        self.assertNotIn("errors", data)
        placed = data["data"]["placeOrder"]
        self.assertEqual(placed["orderStatus"], "PENDING")
        self.assertEqual(placed["paymentStatus"], "PENDING")
        self.assertEqual(placed["totalAmount"], "10.00")
        self.assertEqual(placed["shipping"]["zipCode"], "00100")
        self.assertEqual(placed["items"][0]["unitPrice"], "5.00")
        self.assertTrue(placed["orderNumber"].startswith("UF-"))
        self.assertEqual(self.stock_of(self.product.id), 8)

    def test_query_product(self):
        query = """
            query Product($id: UUID!) {
                product(id: $id) { name stockQuantity isAvailable effectivePrice averageRating }
            }
        """
        response, data = self.post(query, {"id": str(self.product.id)})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(data["data"]["product"]["stockQuantity"], 10)
        self.assertTrue(data["data"]["product"]["isAvailable"])
        self.assertEqual(data["data"]["product"]["effectivePrice"], "5.00")

    def test_domain_error_carries_code(self):
        _, data = self.post(PLACE_ORDER, self.order_input(product_id=uuid4()))

        self.assertIsNone(data["data"])
        self.assertEqual(data["errors"][0]["extensions"]["code"], "NOT_FOUND")

    def test_insufficient_stock_is_conflict(self):
        _, data = self.post(PLACE_ORDER, self.order_input(quantity=11))

        self.assertEqual(data["errors"][0]["extensions"]["code"], "CONFLICT")
        self.assertEqual(self.stock_of(self.product.id), 10)

    def test_cancel_via_api(self):
        _, placed = self.post(PLACE_ORDER, self.order_input(quantity=4))
        order_id = placed["data"]["placeOrder"]["id"]

        query = """
            mutation Cancel($orderId: UUID!) {
                setOrderStatus(orderId: $orderId, status: "CANCELLED") { orderStatus }
            }
        """
        _, data = self.post(query, {"orderId": order_id})
        self.assertEqual(data["data"]["setOrderStatus"]["orderStatus"], "CANCELLED")
        self.assertEqual(self.stock_of(self.product.id), 10)

        _, data = self.post(query, {"orderId": order_id})
        self.assertEqual(data["errors"][0]["extensions"]["code"], "INVALID_STATE")
        self.assertEqual(self.stock_of(self.product.id), 10)

    def test_review_mutation_updates_rating(self):
        query = """
            mutation Review($input: CreateReviewInput!) {
                createReview(input: $input) { rating username pros cons }
            }
        """
        variables = {"input": {"userId": str(self.user_id), "productId": str(self.product.id), "rating": 4, "pros": "Fresh"}}
        _, data = self.post(query, variables)

        self.assertEqual(data["data"]["createReview"]["rating"], 4)
        self.assertEqual(data["data"]["createReview"]["pros"], "Fresh")
        self.assertEqual(data["data"]["createReview"]["cons"], "")
        _, data = self.post(
            "query P($id: UUID!) { product(id: $id) { averageRating } }",
            {"id": str(self.product.id)},
        )
        self.assertEqual(data["data"]["product"]["averageRating"], "4.00")

    def test_idempotent_replay(self):
        headers = {"HTTP_IDEMPOTENCY_KEY": "place-1", "HTTP_X_USER_ID": str(self.user_id)}

        first, first_data = self.post(PLACE_ORDER, self.order_input(), **headers)
        second, second_data = self.post(PLACE_ORDER, self.order_input(), **headers)

        self.assertEqual(first.status_code, 200)
        self.assertEqual(second.status_code, 200)
        self.assertEqual(first_data, second_data)
        self.assertEqual(OrderORM.objects.count(), 1)
        self.assertEqual(self.stock_of(self.product.id), 8)
        self.assertTrue(IdempotencyKey.objects.filter(key="place-1", operation="PLACE_ORDER").exists())

    def test_idempotency_key_reused_with_different_request(self):
        headers = {"HTTP_IDEMPOTENCY_KEY": "place-2", "HTTP_X_USER_ID": str(self.user_id)}

        self.post(PLACE_ORDER, self.order_input(quantity=1), **headers)
        response, data = self.post(PLACE_ORDER, self.order_input(quantity=3), **headers)

        self.assertEqual(response.status_code, 409)
        self.assertEqual(data["error"]["code"], "DUPLICATE_REQUEST")
        self.assertEqual(OrderORM.objects.count(), 1)

    def test_failed_mutation_is_not_cached(self):
        headers = {"HTTP_IDEMPOTENCY_KEY": "place-3", "HTTP_X_USER_ID": str(self.user_id)}

        _, data = self.post(PLACE_ORDER, self.order_input(quantity=50), **headers)

        self.assertIn("errors", data)
        self.assertFalse(IdempotencyKey.objects.filter(key="place-3").exists())

    def test_invalid_json(self):
        response = self.client.post("/graphql/", data="{not json", content_type="application/json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(json.loads(response.content)["error"]["code"], "VALIDATION_ERROR")
