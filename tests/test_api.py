# tests/test_api.py
import logging

import pytest

from shoepos.core.config import settings
from shoepos.services.inventory.inventory_service import MAX_PAIRS_PER_SIZE

API = "/api/v1"

NIKE = {
    "name": "Air Zoom",
    "brand": "Nike",
    "articleNumber": "AX1",
    "color": "red",
    "unitPrice": 50,
    "quantitiesBySize": {"9": 2, "10": 1},
}


@pytest.fixture
def stocked(client):
    response = client.post(f"{API}/stock/restock", json=NIKE)
    assert response.status_code == 201
    return response.json()


class TestBasics:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "running" in response.json()["message"]

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    def test_logging_level_applied_by_app_factory(self, client):
        expected = getattr(logging, settings.LOG_LEVEL, logging.INFO)
        assert logging.getLogger("shoepos").level == expected


class TestStockEndpoints:

    def test_restock_response(self, stocked):
        assert stocked["insertedCount"] == 2
        assert stocked["updatedCount"] == 0
        assert len(stocked["traceableUnits"]) == 3
        unit = stocked["traceableUnits"][0]
        assert unit["code"].startswith("Nike-AX1-9-")
        assert unit["articleNumber"] == "AX1"

    def test_restock_rejects_non_numeric_price(self, client):
        response = client.post(f"{API}/stock/restock", json={**NIKE, "unitPrice": "cincuenta"})
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_current_stock(self, client, stocked):
        client.post(f"{API}/stock/restock", json={**NIKE, "quantitiesBySize": {"9": 5}})

        response = client.get(f"{API}/stock")
        assert response.status_code == 200
        rows = {row["size"]: row for row in response.json()}
        assert rows[9]["quantityOnHand"] == 7
        assert rows[10]["quantityOnHand"] == 1
        assert rows[9]["skuCode"] == "Nike-AX1-9"
        assert rows[9]["unitPrice"] == 50

    def test_barcode_lookup_with_unit_code(self, client, stocked):
        code = stocked["traceableUnits"][1]["code"]

        response = client.get(f"{API}/stock/barcode/{code}")
        assert response.status_code == 200
        body = response.json()
        assert body["skuCode"] == "Nike-AX1-9"
        assert body["quantityOnHand"] == 2

    def test_exact_sku_lookup(self, client, stocked):
        assert client.get(f"{API}/stock/sku/Nike-AX1-10").json()["quantityOnHand"] == 1

        response = client.get(f"{API}/stock/sku/Nike-AX1-11")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_get_and_patch_record(self, client, stocked):
        record = client.get(f"{API}/stock/sku/Nike-AX1-9").json()

        response = client.patch(f"{API}/stock/{record['id']}", json={"quantityOnHand": 6})
        assert response.status_code == 200
        assert response.json()["quantityOnHand"] == 6
        assert client.get(f"{API}/stock/{record['id']}").json()["quantityOnHand"] == 6

    def test_malformed_id(self, client):
        response = client.get(f"{API}/stock/abc")
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_negative_quantity_rejected(self, client, stocked):
        record = client.get(f"{API}/stock/sku/Nike-AX1-9").json()
        response = client.patch(f"{API}/stock/{record['id']}", json={"quantityOnHand": -1})
        assert response.status_code == 400

    @pytest.mark.parametrize("record_id", ["%C2%B2", "9" * 30])
    def test_non_ascii_or_oversized_id(self, client, record_id):
        response = client.get(f"{API}/stock/{record_id}")
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_restock_rejects_sub_cent_price(self, client):
        response = client.post(f"{API}/stock/restock", json={**NIKE, "unitPrice": "50.005"})
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_restock_rejects_oversize_count(self, client):
        response = client.post(
            f"{API}/stock/restock",
            json={**NIKE, "quantitiesBySize": {"9": MAX_PAIRS_PER_SIZE + 1}},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert client.get(f"{API}/stock").json() == []


class TestSaleEndpoints:

    def sell(self, client, cart):
        return client.post(f"{API}/sales/sell", json={"cart": cart})

    def test_sell_and_read_back(self, client, stocked):
        response = self.sell(client, [
            {"skuCode": "Nike-AX1-9", "quantity": 2, "unitSellPrice": 60, "discount": 5},
        ])
        assert response.status_code == 200
        sale_id = response.json()["saleId"]

        sale = client.get(f"{API}/sales/{sale_id}").json()
        item = sale["items"][0]
        assert item["totalAmount"] == 115
        assert item["profit"] == 20
        assert item["shoeInfo"]["brand"] == "Nike"
        assert "soldAt" in sale

        assert client.get(f"{API}/stock/sku/Nike-AX1-9").json()["quantityOnHand"] == 0

    def test_insufficient_stock_is_conflict(self, client, stocked):
        response = self.sell(client, [
            {"skuCode": "Nike-AX1-9", "quantity": 1, "unitSellPrice": 60},
            {"skuCode": "Nike-AX1-10", "quantity": 2, "unitSellPrice": 60},
        ])
        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "conflict"
        assert "Nike-AX1-10" in body["message"]

        assert client.get(f"{API}/stock/sku/Nike-AX1-9").json()["quantityOnHand"] == 2
        assert client.get(f"{API}/sales").json()["count"] == 0

    def test_empty_cart(self, client):
        response = self.sell(client, [])
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_missing_fields(self, client, stocked):
        response = self.sell(client, [{"skuCode": "Nike-AX1-9", "quantity": 1}])
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_list_sales(self, client, stocked):
        self.sell(client, [{"skuCode": "Nike-AX1-9", "quantity": 1, "unitSellPrice": 60}])
        self.sell(client, [{"skuCode": "Nike-AX1-10", "quantity": 1, "unitSellPrice": 70, "discount": 2}])

        body = client.get(f"{API}/sales").json()
        assert body["count"] == 2
        assert body["totalAmount"] == 128
        assert body["sales"][0]["items"][0]["skuCode"] == "Nike-AX1-10"

        future = client.get(f"{API}/sales", params={"from": "2999-01-01T00:00:00"}).json()
        assert future["count"] == 0

    def test_patch_item(self, client, stocked):
        sale_id = self.sell(client, [
            {"skuCode": "Nike-AX1-9", "quantity": 2, "unitSellPrice": 60, "discount": 5},
        ]).json()["saleId"]

        response = client.patch(f"{API}/sales/{sale_id}/items/0", json={"sellPrice": 55})
        assert response.status_code == 200
        item = response.json()["updatedItem"]
        assert item["totalAmount"] == 105
        assert item["profit"] == 20

        missing = client.patch(f"{API}/sales/{sale_id}/items/5", json={"quantity": 1})
        assert missing.status_code == 404

    def test_replace_items(self, client, stocked):
        sale_id = self.sell(client, [
            {"skuCode": "Nike-AX1-9", "quantity": 1, "unitSellPrice": 60},
        ]).json()["saleId"]
        original = client.get(f"{API}/sales/{sale_id}").json()["items"][0]

        response = client.put(f"{API}/sales/{sale_id}/items", json={"items": [
            {**original, "quantity": 2, "discount": 10, "totalAmount": 0},
        ]})
        assert response.status_code == 200
        item = response.json()["items"][0]
        assert item["totalAmount"] == 110
        assert item["shoeInfo"] == original["shoeInfo"]

        empty = client.put(f"{API}/sales/{sale_id}/items", json={"items": []})
        assert empty.status_code == 400

    def test_unknown_sale(self, client):
        response = client.get(f"{API}/sales/999")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_non_ascii_sale_id(self, client):
        response = client.get(f"{API}/sales/%C2%B2")
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestReportEndpoints:

    def test_summaries(self, client, stocked):
        client.post(f"{API}/sales/sell", json={"cart": [
            {"skuCode": "Nike-AX1-9", "quantity": 2, "unitSellPrice": 60, "discount": 5},
        ]})

        sales = client.get(f"{API}/reports/sales-summary").json()
        assert sales["salesCount"] == 1
        assert sales["totalAmount"] == 115
        assert sales["totalProfit"] == 20

        stock = client.get(f"{API}/reports/stock-summary").json()
        assert stock["totalPairs"] == 1
        assert stock["stockValue"] == 50
