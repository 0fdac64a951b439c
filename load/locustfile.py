"""Simulate restaurant tables placing, listing and cancelling orders."""

import logging
import os
import random

from locust import HttpUser, between, events, task
from locust.exception import StopUser
from tables import TableAllocator

MAX_TABLE = int(os.getenv("MAX_TABLE", "100"))
P95_ORDER_MS = 400

_tables = TableAllocator(MAX_TABLE)


class TableUser(HttpUser):
    """One table ordering a batch of dishes and cancelling some of them."""

    host = os.environ.get("HOST", "http://localhost:3030")
    wait_time = between(1, 3)

    def on_start(self) -> None:
        self.table_id = _tables.claim()
        if self.table_id is None:
            logging.warning("no free table left for user, stopping it")
            raise StopUser()
        resp = self.client.get("/menus")
        self.menu_ids = [menu_id for menu_id, _ in resp.json()["data"]]

    def _orders(self) -> list[dict] | None:
        with self.client.get(
            f"/orders/{self.table_id}", name="/orders/[table]", catch_response=True
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"listing failed with {resp.status_code}")
                return None
            return resp.json()["data"]

    @task
    def order_and_cancel(self) -> None:
        """Order 10-19 dishes, check they are listed, then cancel a few."""

        before = self._orders()
        if before is None:
            return
        menu_ids = [random.choice(self.menu_ids) for _ in range(random.randint(10, 19))]
        with self.client.post(
            f"/orders/{self.table_id}",
            json={"menu_ids": menu_ids},
            name="/orders/[table]",
            catch_response=True,
        ) as resp:
            if resp.status_code != 200 or resp.json()["data"]:
                resp.failure("orders rejected")
                return

        after = self._orders()
        if after is None:
            return
        if len(after) - len(before) != len(menu_ids):
            events.request.fire(
                request_type="CHECK",
                name="order count",
                response_time=0,
                response_length=0,
                exception=AssertionError(
                    f"expected {len(menu_ids)} new orders, saw {len(after) - len(before)}"
                ),
            )

        known = {order["id"] for order in before}
        placed = [order for order in after if order["id"] not in known]
        for order in random.sample(placed, random.randint(0, len(placed))):
            with self.client.delete(
                f"/orders/{self.table_id}/{order['id']}",
                name="/orders/[table]/[order]",
                catch_response=True,
            ) as resp:
                if resp.status_code != 200 or resp.json()["data"]["id"] != order["id"]:
                    resp.failure("cancel failed")


@events.test_stop.add_listener
def verify_thresholds(environment, **kwargs) -> None:
    """Fail the test run when p95 targets are not met."""

    order = environment.stats.get("/orders/[table]", "POST")
    if order and order.get_response_time_percentile(0.95) > P95_ORDER_MS:
        print(f"Performance thresholds not met: order p95>{P95_ORDER_MS}ms")
        environment.process_exit_code = 1
