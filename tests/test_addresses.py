from unittest import mock

from sqlalchemy.exc import IntegrityError

from tests.base import ApiTestCase
from grocery.repos.address_repo import AddressRepo
from grocery.data.models import AddressModel, OrderModel


ADDRESS = {"street": "12 Elm St", "city": "Austin", "state": "TX", "zip_code": "73301"}


class AddressApiTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.user = self.create_user()

    def defaults(self, user):
        self.db.expire_all()
        return [
            a.id
            for a in self.db.query(AddressModel).filter_by(user_id=user.id, is_default=True).all()
        ]

    def test_create_and_list_default_first(self):
        self.client.post("/api/address", json=ADDRESS, headers=self.auth(self.user))
        resp = self.client.post(
            "/api/address", json={**ADDRESS, "street": "99 Oak Ave", "is_default": True}, headers=self.auth(self.user)
        )
        self.assertEqual(resp.status_code, 201)

        listed = self.client.get("/api/address", headers=self.auth(self.user)).json()

        self.assertEqual([a["street"] for a in listed], ["99 Oak Ave", "12 Elm St"])
        self.assertTrue(listed[0]["is_default"])

    def test_missing_fields_rejected(self):
        resp = self.client.post("/api/address", json={"street": "12 Elm St"}, headers=self.auth(self.user))
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.count(AddressModel), 0)

    def test_new_default_unsets_previous(self):
        first = self.create_address(self.user, is_default=True)

        resp = self.client.post("/api/address", json={**ADDRESS, "is_default": True}, headers=self.auth(self.user))

        self.assertEqual(self.defaults(self.user), [resp.json()["id"]])
        self.assertNotIn(first.id, self.defaults(self.user))

    def test_update_to_default_leaves_exactly_one(self):
        first = self.create_address(self.user, is_default=True)
        second = self.create_address(self.user, street="2 Side St")

        resp = self.client.put(f"/api/address/{second.id}", json={"is_default": True}, headers=self.auth(self.user))

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.defaults(self.user), [second.id])
        self.assertNotEqual(first.id, second.id)

    def test_database_rejects_second_default(self):
        self.create_address(self.user, is_default=True)

        with self.assertRaises(IntegrityError):
            self.create_address(self.user, is_default=True, street="2 Side St")
        self.db.rollback()

    def test_concurrent_default_reported_as_conflict(self):
        first = self.create_address(self.user, is_default=True)

        # drugi request nie widzi jeszcze domyslnego adresu z pierwszego
        with mock.patch.object(AddressRepo, "unset_defaults", return_value=0):
            resp = self.client.post(
                "/api/address", json={**ADDRESS, "is_default": True}, headers=self.auth(self.user)
            )

        self.assertEqual(resp.status_code, 409)
        self.assertEqual(self.defaults(self.user), [first.id])
        self.assertEqual(self.count(AddressModel), 1)

    def test_default_of_other_user_untouched(self):
        other = self.create_user("other@example.com")
        theirs = self.create_address(other, is_default=True)

        self.client.post("/api/address", json={**ADDRESS, "is_default": True}, headers=self.auth(self.user))

        self.assertEqual(self.defaults(other), [theirs.id])

    def test_partial_update(self):
        address = self.create_address(self.user)

        resp = self.client.put(f"/api/address/{address.id}", json={"city": "Dallas"}, headers=self.auth(self.user))

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["city"], "Dallas")
        self.assertEqual(resp.json()["street"], "1 Main St")

    def test_empty_update_rejected(self):
        address = self.create_address(self.user)
        resp = self.client.put(f"/api/address/{address.id}", json={}, headers=self.auth(self.user))
        self.assertEqual(resp.status_code, 400)

    def test_foreign_address_is_not_found(self):
        other = self.create_user("other@example.com")
        theirs = self.create_address(other)

        put = self.client.put(f"/api/address/{theirs.id}", json={"city": "X"}, headers=self.auth(self.user))
        delete = self.client.delete(f"/api/address/{theirs.id}", headers=self.auth(self.user))

        self.assertEqual(put.status_code, 404)
        self.assertEqual(delete.status_code, 404)
        self.assertEqual(self.count(AddressModel), 1)

    def test_delete_keeps_orders_that_used_it(self):
        address = self.create_address(self.user)
        order = OrderModel(
            user_id=self.user.id,
            subtotal_amount=1,
            tax_amount=0,
            discount_amount=0,
            total_amount=1,
            delivery_type="DELIVERY",
            shipping_address_id=address.id,
        )
        self.db.add(order)
        self.db.commit()

        resp = self.client.delete(f"/api/address/{address.id}", headers=self.auth(self.user))

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "Address deleted successfully", "id": address.id})
        self.assertIsNone(self.order(order.id).shipping_address_id)
