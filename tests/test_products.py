from tests.base import ApiTestCase


class ProductApiTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.apples = self.create_product("Organic Apples", "3.99")
        self.milk = self.create_product("Whole Milk (Gallon)", "4.50", category="Dairy")
        self.bread = self.create_product("Sourdough Bread", "5.25", in_stock=False, category="Bakery")
        self.bananas = self.create_product("Bananas", "0.69")

    def names(self, **params):
        resp = self.client.get("/api/products", params=params)
        self.assertEqual(resp.status_code, 200, resp.text)
        return [p["name"] for p in resp.json()]

    def test_list_all(self):
        self.assertEqual(len(self.names()), 4)

    def test_search_is_case_insensitive_substring(self):
        self.assertEqual(self.names(search="APPLE"), ["Organic Apples"])
        self.assertEqual(self.names(search="zzz"), [])

    def test_search_wildcards_are_literal(self):
        self.create_product("100% Orange Juice", "3.49", category="Beverages")

        self.assertEqual(self.names(search="_"), [])
        self.assertEqual(self.names(search="%"), ["100% Orange Juice"])
        self.assertEqual(self.names(search="0% o"), ["100% Orange Juice"])

    def test_category_is_exact_match(self):
        self.assertEqual(self.names(category="Dair_"), [])
        self.assertEqual(self.names(category="%"), [])

    def test_sort_by_price(self):
        self.assertEqual(
            self.names(sortBy="price", order="desc"),
            ["Sourdough Bread", "Whole Milk (Gallon)", "Organic Apples", "Bananas"],
        )
        self.assertEqual(self.names(sortBy="price")[0], "Bananas")

    def test_other_sort_keys_sort_by_stock(self):
        self.assertEqual(self.names(sortBy="anything", order="desc")[-1], "Sourdough Bread")

    def test_filter_by_category(self):
        self.assertEqual(self.names(category="dairy"), ["Whole Milk (Gallon)"])

    def test_get_product(self):
        resp = self.client.get(f"/api/products/{self.milk.id}")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["name"], "Whole Milk (Gallon)")
        self.assertEqual(body["price"], "4.50")
        self.assertTrue(body["in_stock"])

    def test_missing_product(self):
        self.assertEqual(self.client.get("/api/products/9999").status_code, 404)
        self.assertEqual(self.client.get("/api/products/abc").status_code, 400)
