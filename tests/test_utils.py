from conftest import read_stats

from waifu_api.routers.utils import PASSWORD_ALPHABET
from waifu_api.services import text


def test_owoify_levels():
    assert text.owoify("hello world") == "hewwo wowwd"
    assert text.owoify("I love you") == "I wuv you"
    assert text.owoify("Nani") == "Nyanyi"
    assert text.uwuify("thank you!") == "dank yuu!!"
    assert text.uvuify("hi there?") == "h-hai dewe?!"


def test_owoify_keeps_case():
    assert text.owoify("LOVE") == "WUV"
    assert text.uwuify("The end") == "De end"


def test_owoify_endpoint(client, auth_headers):
    resp = client.get("/owoify", params={"text": "hello world"}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"text": "hewwo wowwd"}
    assert read_stats()["owoify"] == 1


def test_uwuify_and_uvuify_endpoints(client, auth_headers):
    resp = client.get("/uwuify", params={"text": "thank you!"}, headers=auth_headers)
    assert resp.json() == {"text": "dank yuu!!"}
    resp = client.get("/uvuify", params={"text": "hi there?"}, headers=auth_headers)
    assert resp.json() == {"text": "h-hai dewe?!"}


def test_text_is_required(client, auth_headers):
    resp = client.get("/owoify", headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["status"] == 400


def test_password_default_and_custom_length(client, auth_headers):
    body = client.get("/password", headers=auth_headers).json()
    assert len(body["pass"]) == 16
    assert set(body["pass"]) <= set(PASSWORD_ALPHABET)

    body = client.get("/password", params={"charLength": 40}, headers=auth_headers).json()
    assert len(body["pass"]) == 40


def test_password_length_is_bounded(client, auth_headers):
    resp = client.get("/password", params={"charLength": 1000}, headers=auth_headers)
    assert resp.status_code == 400


def test_alltags_lists_categories(client, auth_headers):
    tags = client.get("/alltags", headers=auth_headers).json()["tags"]
    assert "sad" in tags and "hug" in tags and "quote" in tags
    assert tags == sorted(tags)
    assert read_stats()["alltags"] == 1
