"""
API tests for writing, publishing, sealing and replaying stories.
"""

from datetime import datetime, timedelta

from sqlalchemy import text as sql_text

from storytime.models.story import Story


def _create(client, headers, text="A quiet day", **extra):
    resp = client.post("/stories", json={"text": text, **extra}, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()["story"]


def _set_created_at(db, story_id, when):
    db.query(Story).filter(Story.id == story_id).update({"created_at": when})
    db.commit()


class TestCreateStory:

    def test_story_is_scored_and_tagged(self, client, login):
        _, headers = login()
        story = _create(
            client, headers,
            text="I am so happy and joyful today",
            domain="health",
            anchor_tags=["garden", " garden ", "", "mom"],
            prompt_tags=["mom", "spring"],
        )
        assert story["emotion_score"] == 4
        assert story["anchor_tags"] == ["garden", "mom", "spring"]
        assert story["domain"] == "health"
        assert story["is_public"] is False
        assert story["sealed"] is False

    def test_defaults(self, client, login):
        _, headers = login()
        story = _create(client, headers)
        assert story["domain"] == "personal"
        assert story["anchor_tags"] == []
        assert story["emotion_score"] == 3

    def test_blank_text_rejected(self, client, login):
        _, headers = login()
        resp = client.post("/stories", json={"text": "   "}, headers=headers)
        assert resp.status_code == 400

    def test_unknown_domain_rejected(self, client, login):
        _, headers = login()
        resp = client.post("/stories", json={"text": "hi", "domain": "sports"}, headers=headers)
        assert resp.status_code == 422

    def test_text_encrypted_at_rest(self, client, login, db):
        _, headers = login()
        story = _create(client, headers, text="secret garden")
        raw = db.execute(sql_text("SELECT text FROM stories WHERE id = :id"), {"id": story["id"]}).scalar()
        assert raw != "secret garden"
        assert "secret" not in raw
        assert db.get(Story, story["id"]).text == "secret garden"

    def test_list_only_own_stories(self, client, login):
        _, mine = login("me")
        _, theirs = login("them")
        _create(client, mine, text="one")
        _create(client, mine, text="two")
        _create(client, theirs, text="three")

        body = client.get("/stories", headers=mine).json()
        assert body["count"] == 2
        assert {s["text"] for s in body["stories"]} == {"one", "two"}


class TestVisibilityAndSeal:

    def test_toggle_visibility(self, client, login):
        _, headers = login()
        story = _create(client, headers)

        resp = client.post(f"/stories/{story['id']}/visibility", headers=headers)
        assert resp.json() == {"id": story["id"], "is_public": True}
        resp = client.post(f"/stories/{story['id']}/visibility", headers=headers)
        assert resp.json()["is_public"] is False

    def test_cannot_toggle_someone_elses_story(self, client, login):
        _, owner = login("owner")
        _, other = login("other")
        story = _create(client, owner)

        assert client.post(f"/stories/{story['id']}/visibility", headers=other).status_code == 403
        assert client.post("/stories/missing/visibility", headers=other).status_code == 404

    def test_seal_once(self, client, login):
        _, headers = login()
        story = _create(client, headers)
        seal = {"hash": "abc123", "proof": "2026-10-19T10:00:00Z"}

        first = client.post(f"/stories/{story['id']}/seal", json=seal, headers=headers)
        assert first.status_code == 200
        second = client.post(f"/stories/{story['id']}/seal", json=seal, headers=headers)
        assert second.status_code == 409

    def test_empty_seal_rejected(self, client, login):
        _, headers = login()
        story = _create(client, headers)
        resp = client.post(f"/stories/{story['id']}/seal", json={"hash": "", "proof": ""}, headers=headers)
        assert resp.status_code == 400


class TestReplay:

    def _seed(self, client, headers, db):
        base = datetime(2026, 10, 1, 9, 0)
        s1 = _create(client, headers, text="first", anchor_tags=["a", "b"], domain="personal")
        s2 = _create(client, headers, text="second", domain="health")
        s3 = _create(client, headers, text="third", anchor_tags=["a"], domain="education")
        for offset, story in enumerate([s1, s2, s3]):
            _set_created_at(db, story["id"], base + timedelta(hours=offset))
        return s1, s2, s3

    def test_replay_by_tag(self, client, login, db):
        _, headers = login()
        s1, s2, s3 = self._seed(client, headers, db)

        resp = client.get("/stories/replay", params={"group_by": "tag"}, headers=headers).json()
        assert resp["total"] == 4
        assert resp["index"] == 0
        assert resp["story"]["id"] == f"{s1['id']}-a"

        resp = client.get("/stories/replay", params={"group_by": "tag", "index": 1, "step": "next"}, headers=headers).json()
        assert resp["index"] == 2
        assert resp["story"]["id"] == s2["id"]

    def test_replay_by_domain(self, client, login, db):
        _, headers = login()
        self._seed(client, headers, db)

        texts = []
        for index in range(3):
            resp = client.get("/stories/replay", params={"group_by": "domain", "index": index}, headers=headers)
            texts.append(resp.json()["story"]["text"])
        assert texts == ["third", "second", "first"]

    def test_cursor_wraps(self, client, login, db):
        _, headers = login()
        self._seed(client, headers, db)

        prev = client.get("/stories/replay", params={"index": 0, "step": "previous"}, headers=headers).json()
        assert prev["index"] == 2
        assert prev["story"]["text"] == "third"

        nxt = client.get("/stories/replay", params={"index": 2, "step": "next"}, headers=headers).json()
        assert nxt["index"] == 0
        assert nxt["story"]["text"] == "first"

    def test_empty_replay(self, client, login):
        _, headers = login()
        resp = client.get("/stories/replay", headers=headers).json()
        assert resp == {"group_by": "none", "total": 0, "index": 0, "story": None}

    def test_invalid_mode(self, client, login):
        _, headers = login()
        resp = client.get("/stories/replay", params={"group_by": "color"}, headers=headers)
        assert resp.status_code == 422
