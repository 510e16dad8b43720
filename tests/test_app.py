import json
import unittest
from unittest.mock import patch

from app import app as flask_app
import app as app_mod
from game import Controller, Move


class TestFlaskAPI(unittest.TestCase):
    def setUp(self):
        self.client = flask_app.test_client()

    def tearDown(self):
        app_mod.GAMES.clear()

    def _post(self, url, payload):
        return self.client.post(url, data=json.dumps(payload), content_type="application/json")

    def _new(self, **payload):
        r = self._post("/api/new", payload)
        self.assertEqual(r.status_code, 200)
        return r.get_json()

    def test_given_new_game_when_posted_then_hidden_board_and_flips_returned(self):
        data = self._new(seed=123, mode="pve")
        self.assertTrue(data["ok"])
        self.assertIn(data["gameId"], app_mod.GAMES)
        board = data["state"]["board"]
        self.assertEqual(len(board), 17)
        for cell in board[:16]:
            self.assertFalse(cell["revealed"])
            self.assertTrue(cell["hidden"])
            self.assertIsNone(cell["piece"])
        self.assertTrue(board[16]["revealed"])
        self.assertEqual(len(data["legalMoves"]), 16)
        self.assertEqual(data["legalMoves"][0], {"from": None, "to": 0, "flip": True})
        self.assertEqual(data["state"]["phase"], "AWAITING_FIRST_FLIP")
        self.assertEqual(data["state"]["turn"], "RED")

    def test_given_flip_when_posted_then_card_revealed_and_colors_bound(self):
        data = self._new(seed=5, mode="pve", policy="turn")
        r = self._post("/api/move", {"gameId": data["gameId"], "move": {"to": 7, "flip": True}})
        self.assertEqual(r.status_code, 200)
        out = r.get_json()
        cell = out["state"]["board"][7]
        self.assertTrue(cell["revealed"])
        self.assertIn(cell["piece"]["kind"], ["ELEPHANT", "LION", "TIGER", "LEOPARD", "WOLF", "DOG", "CAT", "RAT"])
        self.assertEqual(out["state"]["redPlayer"], "HUMAN")
        self.assertEqual(out["state"]["bluePlayer"], "AUTOMATED")
        self.assertEqual(out["state"]["userColor"], "RED")
        self.assertEqual(out["state"]["firstReveal"]["actor"], "HUMAN")
        self.assertEqual(out["transition"]["turn"], "RED")
        self.assertEqual(out["state"]["turn"], "BLUE")

    def test_given_illegal_or_malformed_move_when_posted_then_400(self):
        data = self._new(seed=5)
        r = self._post("/api/move", {"gameId": data["gameId"], "move": {"from": 0, "to": 1}})
        self.assertEqual(r.status_code, 400)
        self.assertFalse(r.get_json()["ok"])
        self.assertEqual(len(r.get_json()["legalMoves"]), 16)
        r2 = self._post("/api/move", {"gameId": data["gameId"], "move": {"from": 0, "to": 1, "flip": True}})
        self.assertEqual(r2.status_code, 400)
        r3 = self._post("/api/move", {"gameId": data["gameId"]})
        self.assertEqual(r3.status_code, 400)

    def test_given_unknown_game_when_requested_then_404(self):
        self.assertEqual(self.client.get("/api/game/nope").status_code, 404)
        r = self._post("/api/move", {"gameId": "nope", "move": {"to": 0}})
        self.assertEqual(r.status_code, 404)
        self.assertEqual(self._post("/api/ai", {"gameId": "nope"}).status_code, 404)

    def test_given_pending_ai_decision_when_human_moves_then_409_until_cancelled(self):
        data = self._new(seed=2)
        engine = app_mod.GAMES[data["gameId"]]
        engine.begin_automated()
        r = self._post("/api/move", {"gameId": data["gameId"], "move": {"to": 0, "flip": True}})
        self.assertEqual(r.status_code, 409)
        self.assertTrue(self.client.get(f"/api/game/{data['gameId']}").get_json()["pending"])
        c = self._post("/api/cancel", {"gameId": data["gameId"]})
        self.assertTrue(c.get_json()["cancelled"])
        r2 = self._post("/api/move", {"gameId": data["gameId"], "move": {"to": 0, "flip": True}})
        self.assertEqual(r2.status_code, 200)

    def test_given_ai_turn_when_requested_then_ai_plays_one_legal_action(self):
        data = self._new(seed=9, mode="pve", policy="turn")
        gid = data["gameId"]
        self._post("/api/move", {"gameId": gid, "move": {"to": 0, "flip": True}})
        r = self._post("/api/ai", {"gameId": gid})
        self.assertEqual(r.status_code, 200)
        out = r.get_json()
        self.assertEqual(out["transition"]["turn"], "BLUE")
        self.assertEqual(out["state"]["turn"], "RED")
        self.assertTrue(out["reasoning"])
        # Human's turn again: the AI must wait.
        self.assertEqual(self._post("/api/ai", {"gameId": gid}).status_code, 409)

    def test_given_pvp_game_when_ai_requested_then_409(self):
        data = self._new(seed=1, mode="pvp")
        self.assertEqual(self._post("/api/ai", {"gameId": data["gameId"]}).status_code, 409)

    def test_given_bad_config_when_new_game_then_400(self):
        self.assertEqual(self._post("/api/new", {"mode": "solo"}).status_code, 400)
        self.assertEqual(self._post("/api/new", {"seed": "abc"}).status_code, 400)
        r = self._post("/api/new", {"lang": "fr"})
        self.assertEqual(r.status_code, 400)
        self.assertIn("fr", r.get_json()["error"])
        self.assertEqual(app_mod.GAMES, {})

    def test_given_non_object_payloads_when_posted_then_400(self):
        gid = self._new(seed=3)["gameId"]
        for bad in ([0, 1], "0-1", 7, None):
            r = self._post("/api/move", {"gameId": gid, "move": bad})
            self.assertEqual(r.status_code, 400, bad)
            self.assertFalse(r.get_json()["ok"])
        for url in ("/api/new", "/api/move", "/api/ai", "/api/cancel"):
            r = self._post(url, [1, 2])
            self.assertEqual(r.status_code, 400, url)
        self.assertEqual(self._post("/api/move", "text").status_code, 400)

    def test_given_actor_field_when_moving_in_pve_then_request_still_acts_for_human(self):
        gid = self._new(seed=9, mode="pve", policy="turn")["gameId"]
        self._post("/api/move", {"gameId": gid, "move": {"to": 0, "flip": True}})
        r = self._post("/api/move", {"gameId": gid, "move": {"to": 1, "flip": True}, "actor": "AUTOMATED"})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(app_mod.GAMES[gid].state.turn.value, "BLUE")

    def test_given_existing_game_when_deleted_then_gone(self):
        gid = self._new(seed=1)["gameId"]
        r = self.client.delete(f"/api/game/{gid}")
        self.assertEqual(r.status_code, 200)
        self.assertNotIn(gid, app_mod.GAMES)
        self.assertEqual(self.client.get(f"/api/game/{gid}").status_code, 404)
        self.assertEqual(self.client.delete(f"/api/game/{gid}").status_code, 404)

    def test_given_game_cap_when_more_games_created_then_least_recently_used_evicted(self):
        with patch.object(app_mod, "MAX_GAMES", 2):
            first = self._new(seed=1)["gameId"]
            second = self._new(seed=2)["gameId"]
            self.client.get(f"/api/game/{first}")  # touch: second is now the oldest
            third = self._new(seed=3)["gameId"]
        self.assertEqual(set(app_mod.GAMES), {first, third})
        self.assertEqual(self.client.get(f"/api/game/{second}").status_code, 404)

    def test_given_json_helpers_when_round_tripping_move_then_same_move(self):
        for m in (Move.flip(3), Move.step(5, 16)):
            self.assertEqual(app_mod.json_to_move(app_mod.move_to_json(m)), m)
        self.assertEqual(Controller.HUMAN.value, "HUMAN")


if __name__ == "__main__":
    unittest.main()
