import pytest
from fastapi.testclient import TestClient

from wordtok.main import create_app

CORPUS = "Hello, world! Hello."


@pytest.fixture
def cli():
    return TestClient(create_app(corpus_path=None))


@pytest.fixture
def trained(cli):
    r = cli.post("/train", json={"corpus": CORPUS})
    assert r.status_code == 200
    return cli


def test_health(cli):
    assert cli.get("/health").json() == {"status": "ok", "trained": False}


def test_train(cli):
    r = cli.post("/train", json={"corpus": CORPUS})
    assert r.status_code == 200
    assert r.json() == {
        "message": "Tokenizer successfully trained! Vocabulary size: 9",
        "vocab_size": 9,
    }
    assert cli.get("/health").json()["trained"] is True


def test_train_blank_corpus(cli):
    r = cli.post("/train", json={"corpus": "   \n"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Please enter text to train the tokenizer."


def test_untrained_endpoints(cli):
    for path, body in (("/encode", {"text": "hi"}), ("/decode", {"ids": [4]})):
        r = cli.post(path, json=body)
        assert r.status_code == 409
        assert r.json()["detail"] == "Please train the tokenizer first."
    assert cli.get("/vocab").status_code == 409


def test_encode(trained):
    r = trained.post("/encode", json={"text": "hello world moon"})
    assert r.status_code == 200
    assert r.json() == {"ids": [4, 6, 0], "ids_text": "4, 6, 0"}
    assert trained.post("/encode", json={"text": "  "}).status_code == 400


def test_decode_list_and_string(trained):
    assert trained.post("/decode", json={"ids": [4, 6]}).json() == {"text": "hello world"}
    assert trained.post("/decode", json={"ids": "4, 5"}).json() == {"text": "hello,"}
    assert trained.post("/decode", json={"ids": "9999"}).json() == {"text": "[UNKNOWN ID:9999]"}


def test_encode_output_feeds_decode(trained):
    ids_text = trained.post("/encode", json={"text": "Hello world!"}).json()["ids_text"]
    assert trained.post("/decode", json={"ids": ids_text}).json()["text"] == "hello world!"


def test_decode_bad_input(trained):
    r = trained.post("/decode", json={"ids": "4, abc"})
    assert r.status_code == 422
    assert r.json()["detail"] == "Invalid token id: 'abc'"
    assert trained.post("/decode", json={"ids": " , "}).status_code == 400
    assert trained.post("/decode", json={"ids": []}).status_code == 400


def test_vocab(trained):
    out = trained.get("/vocab", params={"limit": 5}).json()
    assert out["vocab_size"] == 9
    assert out["tokens"] == [
        {"token": "<unk>", "id": 0},
        {"token": "<pad>", "id": 1},
        {"token": "<cls>", "id": 2},
        {"token": "<sep>", "id": 3},
        {"token": "hello", "id": 4},
    ]
    assert len(trained.get("/vocab").json()["tokens"]) == 9


def test_apps_do_not_share_state(trained):
    other = TestClient(create_app(corpus_path=None))
    assert other.get("/health").json()["trained"] is False


def test_train_from_corpus_file(tmp_path):
    path = tmp_path / "corpus.txt"
    path.write_text("one two two", encoding="utf8")
    cli = TestClient(create_app(corpus_path=str(path)))
    assert cli.post("/encode", json={"text": "two one"}).json()["ids"] == [4, 5]


def test_decode_rejects_non_integer_ids(trained):
    for ids in ([True], ["4"], ["4", "6"], [4.5]):
        r = trained.post("/decode", json={"ids": ids})
        assert r.status_code == 422, ids
