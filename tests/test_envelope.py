import unittest

from boardgame_list.services.envelope import build_list_envelope, build_record_envelope, build_self_link
from boardgame_list.services.query_engine import Page
from boardgame_list.services.query_spec import build_query_spec
from boardgame_list.services.resources import BOARD_GAMES


class EnvelopeTests(unittest.TestCase):
    def test_list_envelope(self):
        spec = build_query_spec(BOARD_GAMES, filter_query="Go", page_index=2, page_size=5)
        page = Page(items=({"id": 1},), total_matching=11)
        envelope = build_list_envelope(page, spec, "https://api.example.com/BoardGames")
        self.assertEqual(
            envelope,
            {
                "data": [{"id": 1}],
                "pageIndex": 2,
                "pageSize": 5,
                "recordCount": 11,
                "links": [
                    {"href": "https://api.example.com/BoardGames?pageIndex=2&pageSize=5", "rel": "self", "type": "GET"}
                ],
            },
        )

    def test_record_envelope_for_missing_record(self):
        envelope = build_record_envelope(None, "https://api.example.com/Mechanics", "delete", {"id": 7})
        self.assertIsNone(envelope["data"])
        self.assertIsNone(envelope["recordCount"])
        self.assertEqual(envelope["links"][0], {"href": "https://api.example.com/Mechanics?id=7", "rel": "self", "type": "DELETE"})

    def test_self_link_skips_none_and_encodes_values(self):
        link = build_self_link("http://h/BoardGames", "POST", {"id": 1, "name": "Ticket & Ride", "year": None})
        self.assertEqual(link["href"], "http://h/BoardGames?id=1&name=Ticket+%26+Ride")

    def test_self_link_without_params(self):
        self.assertEqual(build_self_link("http://h/x", "GET")["href"], "http://h/x")


if __name__ == "__main__":
    unittest.main()
