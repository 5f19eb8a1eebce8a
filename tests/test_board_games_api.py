from unittest.mock import MagicMock

from tests.base import *  # noqa: F401,F403


def _games(*rows):
    return [dict(name=name, year=year, min_players=2, max_players=4, play_time=30, min_age=10) for name, year in rows]


class BoardGamesListTests(CatalogApiBase):
    def setUp(self):
        super().setUp()
        self._seed_board_games(
            *_games(("Go Fish", 2001), ("Catan", 1995), ("Gone Home", 2010), ("Pandemic", 2008), ("Let's Go", 2020))
        )

    def test_filter_sort_and_page_end_to_end(self):
        response = self.client.get(
            "/BoardGames",
            params={"filterQuery": "Go", "sortColumn": "year", "sortOrder": "desc", "pageIndex": 0, "pageSize": 2},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual([item["year"] for item in body["data"]], [2020, 2010])
        self.assertEqual(body["recordCount"], 3)
        self.assertEqual(body["pageIndex"], 0)
        self.assertEqual(body["pageSize"], 2)
        self.assertEqual(len(body["links"]), 1)
        link = body["links"][0]
        self.assertEqual(link["rel"], "self")
        self.assertEqual(link["type"], "GET")
        self.assertTrue(link["href"].startswith("http://testserver/BoardGames?"))
        self.assertIn("pageIndex=0", link["href"])
        self.assertIn("pageSize=2", link["href"])

    def test_second_page_continues_without_overlap(self):
        first = self.client.get("/BoardGames", params={"sortColumn": "name", "pageIndex": 0, "pageSize": 2}).json()
        second = self.client.get("/BoardGames", params={"sortColumn": "name", "pageIndex": 1, "pageSize": 2}).json()
        third = self.client.get("/BoardGames", params={"sortColumn": "name", "pageIndex": 2, "pageSize": 2}).json()
        names = [item["name"] for page in (first, second, third) for item in page["data"]]
        self.assertEqual(names, ["Catan", "Go Fish", "Gone Home", "Let's Go", "Pandemic"])
        self.assertEqual(len(third["data"]), 1)

    def test_filter_is_case_insensitive(self):
        body = self.client.get("/BoardGames", params={"filterQuery": "pANDem"}).json()
        self.assertEqual([item["name"] for item in body["data"]], ["Pandemic"])
        self.assertEqual(body["recordCount"], 1)

    def test_filter_text_is_matched_verbatim(self):
        body = self.client.get("/BoardGames", params={"filterQuery": " Go"}).json()
        self.assertEqual([item["name"] for item in body["data"]], ["Let's Go"])
        self.assertEqual(body["recordCount"], 1)

    def test_expired_entries_for_unread_keys_are_released(self):
        for index in range(100):
            self.assertEqual(self.client.get("/BoardGames", params={"filterQuery": f"q{index}"}).status_code, 200)
        self.assertEqual(len(self.cache), 100)

        self.clock.advance(3600)
        self.client.get("/BoardGames", params={"filterQuery": "fresh"})
        self.assertEqual(len(self.cache), 1)

    def test_list_items_use_camel_case_fields(self):
        body = self.client.get("/BoardGames", params={"filterQuery": "Catan"}).json()
        item = body["data"][0]
        self.assertEqual(
            set(item),
            {"id", "name", "year", "minPlayers", "maxPlayers", "playTime", "ownedUsers", "minAge"},
        )

    def test_defaults_apply_when_parameters_are_absent(self):
        body = self.client.get("/BoardGames").json()
        self.assertEqual(body["pageSize"], settings.LIST_DEFAULT_PAGE_SIZE)
        self.assertEqual(body["data"][0]["name"], "Catan")

    def test_page_size_is_clamped(self):
        body = self.client.get("/BoardGames", params={"pageSize": 10_000, "pageIndex": -3}).json()
        self.assertEqual(body["pageSize"], settings.LIST_MAX_PAGE_SIZE)
        self.assertEqual(body["pageIndex"], 0)
        body = self.client.get("/BoardGames", params={"pageSize": 0}).json()
        self.assertEqual(body["pageSize"], 1)
        self.assertEqual(len(body["data"]), 1)

    def test_unknown_sort_column_and_order_report_all_errors(self):
        response = self.client.get("/BoardGames", params={"sortColumn": "password_hash", "sortOrder": "sideways"})
        self.assertEqual(response.status_code, 400)
        codes = {error["code"] for error in response.json()["detail"]["errors"]}
        self.assertEqual(codes, {"InvalidSortColumn", "InvalidSortOrder"})
        self.assertEqual(len(self.cache), 0)

    def test_listing_is_publicly_cacheable(self):
        response = self.client.get("/BoardGames")
        self.assertEqual(
            response.headers.get("cache-control"),
            f"public, max-age={settings.LIST_RESPONSE_MAX_AGE_SECONDS}",
        )

    def test_cached_items_may_be_stale_but_record_count_is_live(self):
        params = {"sortColumn": "year", "sortOrder": "asc", "pageSize": 2}
        first = self.client.get("/BoardGames", params=params).json()
        self.assertEqual(first["recordCount"], 5)

        self._seed_board_games(*_games(("Agricola", 1990)))
        second = self.client.get("/BoardGames", params=params).json()
        self.assertEqual(second["data"], first["data"])
        self.assertEqual(second["recordCount"], 6)

        self.clock.advance(settings.LIST_CACHE_TTL_SECONDS + 1)
        third = self.client.get("/BoardGames", params=params).json()
        self.assertEqual(third["data"][0]["name"], "Agricola")
        self.assertEqual(third["recordCount"], 6)

    def test_parameter_order_does_not_change_cache_entry(self):
        self.client.get("/BoardGames?sortOrder=DESC&sortColumn=Year&pageSize=2")
        self.client.get("/BoardGames?pageSize=2&sortColumn=year&sortOrder=desc")
        self.assertEqual(len(self.cache), 1)


class BoardGamesMutationTests(CatalogApiBase):
    def setUp(self):
        super().setUp()
        (self.game_id,) = self._seed_board_games(*_games(("Carcassonne", 2000)))

    def test_update_requires_authentication(self):
        response = self.client.post("/BoardGames", json={"id": self.game_id, "name": "X"})
        self.assertEqual(response.status_code, 401)

    def test_update_requires_moderator(self):
        response = self.client.post("/BoardGames", headers=self._auth_headers(), json={"id": self.game_id, "name": "X"})
        self.assertEqual(response.status_code, 403)

    def test_moderator_partial_update_keeps_zero_and_empty_fields(self):
        response = self.client.post(
            "/BoardGames",
            headers=self._auth_headers("Moderator"),
            json={"id": self.game_id, "name": "", "year": 2001, "minPlayers": 0, "playTime": 45},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        data = body["data"]
        self.assertEqual(data["name"], "Carcassonne")
        self.assertEqual(data["year"], 2001)
        self.assertEqual(data["minPlayers"], 2)
        self.assertEqual(data["playTime"], 45)
        self.assertEqual(body["links"][0]["type"], "POST")
        self.assertIn(f"id={self.game_id}", body["links"][0]["href"])
        self.assertEqual(response.headers.get("cache-control"), "no-store")

    def test_administrator_may_update(self):
        response = self.client.post(
            "/BoardGames", headers=self._auth_headers("Administrator"), json={"id": self.game_id, "name": "Renamed"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["name"], "Renamed")

    def test_update_of_missing_record_returns_null_data(self):
        response = self.client.post("/BoardGames", headers=self._auth_headers("Moderator"), json={"id": 999, "name": "X"})
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()["data"])

    def test_update_does_not_purge_list_cache(self):
        before = self.client.get("/BoardGames").json()
        self.client.post("/BoardGames", headers=self._auth_headers("Moderator"), json={"id": self.game_id, "name": "New"})
        after = self.client.get("/BoardGames").json()
        self.assertEqual(after["data"][0]["name"], before["data"][0]["name"])

    def test_delete_without_role_is_denied_before_data_access(self):
        db = MagicMock()

        def mock_db():
            yield db

        app.dependency_overrides[get_db] = mock_db
        response = self.client.delete("/BoardGames", params={"id": self.game_id}, headers=self._auth_headers())
        self.assertEqual(response.status_code, 403)
        self.assertEqual(db.mock_calls, [])

    def test_moderator_cannot_delete(self):
        response = self.client.delete(
            "/BoardGames", params={"id": self.game_id}, headers=self._auth_headers("Moderator")
        )
        self.assertEqual(response.status_code, 403)

    def test_administrator_deletes_and_gets_deleted_record(self):
        headers = self._auth_headers("Administrator")
        response = self.client.delete("/BoardGames", params={"id": self.game_id}, headers=headers)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["data"]["name"], "Carcassonne")
        self.assertEqual(body["links"][0]["type"], "DELETE")
        self.assertTrue(body["links"][0]["href"].endswith(f"/BoardGames?id={self.game_id}"))

        again = self.client.delete("/BoardGames", params={"id": self.game_id}, headers=headers)
        self.assertEqual(again.status_code, 200)
        self.assertIsNone(again.json()["data"])
