"""Shared pytest fixtures: sample Lexicon documents and a generated tree."""

import json
from pathlib import Path

import pytest


POST = {
    "lexicon": 1,
    "id": "app.bsky.feed.post",
    "defs": {
        "main": {
            "type": "record",
            "description": "Record containing a Bluesky post.",
            "key": "tid",
            "record": {
                "type": "object",
                "required": ["text", "createdAt"],
                "properties": {
                    "text": {"type": "string", "maxLength": 3000, "maxGraphemes": 300},
                    "reply": {"type": "ref", "ref": "#replyRef"},
                    "embed": {
                        "type": "union",
                        "refs": ["app.bsky.embed.images", "app.bsky.embed.external"],
                    },
                    "langs": {"type": "array", "maxLength": 3, "items": {"type": "string", "format": "language"}},
                    "labels": {"type": "union", "refs": ["com.atproto.label.defs#selfLabels"]},
                    "tags": {
                        "type": "array",
                        "maxLength": 8,
                        "items": {"type": "string", "maxLength": 640, "maxGraphemes": 64},
                    },
                    "createdAt": {"type": "string", "format": "datetime"},
                },
            },
        },
        "replyRef": {
            "type": "object",
            "required": ["root", "parent"],
            "properties": {
                "root": {"type": "ref", "ref": "com.atproto.repo.strongRef"},
                "parent": {"type": "ref", "ref": "com.atproto.repo.strongRef"},
            },
        },
        "entity": {
            "type": "object",
            "description": "Deprecated: use facets instead.",
            "required": ["type", "value"],
            "properties": {
                "type": {"type": "string", "description": "Expected values are 'mention' and 'link'."},
                "value": {"type": "string"},
            },
        },
    },
}

GET_FEED = {
    "lexicon": 1,
    "id": "app.bsky.feed.getFeed",
    "defs": {
        "main": {
            "type": "query",
            "description": "Get a hydrated feed from an actor's selected feed generator.",
            "parameters": {
                "type": "params",
                "required": ["feed"],
                "properties": {
                    "feed": {"type": "string", "format": "at-uri"},
                    "limit": {"type": "integer", "minimum": 1, "maximum": 100, "default": 50},
                    "cursor": {"type": "string"},
                },
            },
            "output": {
                "encoding": "application/json",
                "schema": {
                    "type": "object",
                    "required": ["feed"],
                    "properties": {
                        "cursor": {"type": "string"},
                        "feed": {"type": "array", "items": {"type": "ref", "ref": "app.bsky.feed.defs#feedViewPost"}},
                    },
                },
            },
        }
    },
}

CREATE_RECORD = {
    "lexicon": 1,
    "id": "com.atproto.repo.createRecord",
    "defs": {
        "main": {
            "type": "procedure",
            "description": "Create a single new repository record.",
            "input": {
                "encoding": "application/json",
                "schema": {
                    "type": "object",
                    "required": ["repo", "collection", "record"],
                    "properties": {
                        "repo": {"type": "string", "format": "at-identifier"},
                        "collection": {"type": "string", "format": "nsid"},
                        "rkey": {"type": "string", "maxLength": 15},
                        "validate": {"type": "boolean"},
                        "record": {"type": "unknown"},
                    },
                },
            },
            "output": {
                "encoding": "application/json",
                "schema": {
                    "type": "object",
                    "required": ["uri", "cid"],
                    "properties": {
                        "uri": {"type": "string", "format": "at-uri"},
                        "cid": {"type": "string", "format": "cid"},
                    },
                },
            },
        }
    },
}

STRONG_REF = {
    "lexicon": 1,
    "id": "com.atproto.repo.strongRef",
    "defs": {
        "main": {
            "type": "object",
            "required": ["uri", "cid"],
            "properties": {
                "uri": {"type": "string", "format": "at-uri"},
                "cid": {"type": "string", "format": "cid"},
            },
        }
    },
}

THING = {
    "id": "com.example.thing",
    "defs": {
        "main": {
            "type": "record",
            "key": "tid",
            "record": {
                "type": "object",
                "required": ["value"],
                "properties": {"value": {"type": "integer"}},
            },
        }
    },
}

# Only a subscription, which is not compiled.
SUBSCRIBE = {
    "lexicon": 1,
    "id": "com.atproto.sync.subscribeRepos",
    "defs": {"main": {"type": "subscription", "message": {"schema": {"type": "union", "refs": []}}}},
}


@pytest.fixture
def post_doc():
    return json.loads(json.dumps(POST))


@pytest.fixture
def get_feed_doc():
    return json.loads(json.dumps(GET_FEED))


@pytest.fixture
def create_record_doc():
    return json.loads(json.dumps(CREATE_RECORD))


@pytest.fixture
def strong_ref_doc():
    return json.loads(json.dumps(STRONG_REF))


@pytest.fixture
def thing_doc():
    return json.loads(json.dumps(THING))


@pytest.fixture
def subscribe_doc():
    return json.loads(json.dumps(SUBSCRIBE))


@pytest.fixture
def lexicon_dir(tmp_path: Path) -> Path:
    """A directory tree of Lexicon JSON files laid out by NSID."""
    root = tmp_path / "lexicons"
    for doc in (POST, GET_FEED, CREATE_RECORD, STRONG_REF, THING, SUBSCRIBE):
        path = root.joinpath(*doc["id"].split(".")[:-1]) / f"{doc['id'].split('.')[-1]}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(doc, indent=2), encoding="utf-8")
    return root
