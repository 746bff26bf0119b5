from conftest import read_stats

from waifu_api.services import sampler, stats


def test_sad_end_to_end(client, auth_headers, seed):
    seed("sad", {"id": 1, "url": "https://x/1.gif"})
    before = read_stats()["sad"]

    resp = client.get("/sad", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json() == {"url": "https://x/1.gif"}
    assert read_stats()["sad"] == before + 1


def test_empty_category_returns_404_with_name(client, auth_headers):
    resp = client.get("/sad", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json() == {"status": 404, "message": "Could not find any Sad Gif"}
    counters = read_stats()
    assert counters["sad"] == 0
    assert counters["failed_requests"] == 0


def test_fact_and_quote_endpoints(client, auth_headers, seed):
    seed("fact", {"id": 3, "fact": "Otters hold hands while sleeping."})
    seed("quote", {"id": 4, "quote": "Believe it", "author": "Naruto", "anime": "Naruto"})

    assert client.get("/fact", headers=auth_headers).json() == {
        "fact": "Otters hold hands while sleeping."
    }
    assert client.get("/quote", headers=auth_headers).json() == {
        "quote": "Believe it",
        "author": "Naruto",
        "anime": "Naruto",
    }
    resp = client.get("/waifu", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Could not find any Waifu"


def test_sampler_failure_counts_as_failed_request(client, auth_headers, monkeypatch):
    def broken(db, category):
        raise RuntimeError("storage unavailable")

    monkeypatch.setattr(sampler, "sample", broken)

    resp = client.get("/hug", headers=auth_headers)

    assert resp.status_code == 500
    assert resp.json() == {"status": 500, "message": "Internal Server Error"}
    counters = read_stats()
    assert counters["failed_requests"] == 1
    assert counters["hug"] == 0


def test_counts_track_successes_and_failures(client, auth_headers, seed, monkeypatch):
    seed("sad", {"id": 1, "url": "https://x/1.gif"})
    before = read_stats()

    for _ in range(4):
        assert client.get("/sad", headers=auth_headers).status_code == 200

    real_sample = sampler.sample

    def flaky(db, category):
        if category.name == "kiss":
            raise RuntimeError("boom")
        return real_sample(db, category)

    monkeypatch.setattr(sampler, "sample", flaky)
    for _ in range(3):
        assert client.get("/kiss", headers=auth_headers).status_code == 500

    after = read_stats()
    assert after["sad"] == before["sad"] + 4
    assert after["failed_requests"] == before["failed_requests"] + 3


def test_stats_failure_does_not_change_response(client, auth_headers, seed, monkeypatch):
    seed("wave", {"id": 1, "url": "https://x/wave.gif"})

    real_increment = stats.increment

    def broken_increment(db, field):
        if field == "wave":
            raise RuntimeError("stats store down")
        return real_increment(db, field)

    monkeypatch.setattr(stats, "increment", broken_increment)

    resp = client.get("/wave", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"url": "https://x/wave.gif"}
    counters = read_stats()
    assert counters["wave"] == 0
    assert counters["failed_requests"] == 1


def test_failure_after_sampling_counts_as_failed_request(client, auth_headers, seed, monkeypatch):
    seed("wink", {"id": 1, "url": "https://x/wink.gif"})

    def broken_view(record):
        raise ValueError("cannot serialize")

    monkeypatch.setattr(sampler, "public_view", broken_view)

    resp = client.get("/wink", headers=auth_headers)
    assert resp.status_code == 500
    assert resp.json() == {"status": 500, "message": "Internal Server Error"}
    counters = read_stats()
    assert counters["failed_requests"] == 1
    assert counters["wink"] == 0


def test_every_category_has_a_route(app):
    from waifu_api.categories import CATEGORIES

    for category in CATEGORIES:
        assert app.url_path_for(f"random_{category.name}") == f"/{category.name}"


def test_every_category_is_served_by_its_handler(client, auth_headers):
    from waifu_api.categories import CATEGORIES

    for category in CATEGORIES:
        resp = client.get(f"/{category.name}", headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json()["message"] == category.not_found_message
