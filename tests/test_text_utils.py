from stock_analysis_bot.utils.text import MetaTextExtractor, parse_stock_names


def test_parse_stock_names():
    assert parse_stock_names("Reliance, TCS  infy") == ["Reliance", "TCS", "infy"]
    assert parse_stock_names(" TCS ") == ["TCS"]
    assert parse_stock_names(" , ") == []


def _payload(messages, contacts=None, field="messages"):
    return {
        "object": "whatsapp_business_account",
        "entry": [
            {
                "id": "1",
                "changes": [
                    {
                        "field": field,
                        "value": {"messages": messages, "contacts": contacts or []},
                    }
                ],
            }
        ],
    }


def test_is_whatsapp_payload():
    assert MetaTextExtractor.is_whatsapp_payload(_payload([]))
    assert not MetaTextExtractor.is_whatsapp_payload({"object": "page"})
    assert not MetaTextExtractor.is_whatsapp_payload(["not", "a", "dict"])


def test_extract_text_messages_with_profile_names():
    body = _payload(
        [
            {"from": "919800000001", "id": "wamid.1", "timestamp": "1700000000", "type": "text", "text": {"body": "TCS"}},
            {"from": "919800000001", "id": "wamid.2", "type": "image", "image": {"id": "img"}},
            {"from": "919800000002", "id": "wamid.3", "type": "text", "text": {"body": "english"}},
        ],
        contacts=[{"wa_id": "919800000001", "profile": {"name": "Asha"}}],
    )

    messages = MetaTextExtractor.extract_messages(body)

    assert [(m.sender, m.text, m.message_id) for m in messages] == [
        ("919800000001", "TCS", "wamid.1"),
        ("919800000002", "english", "wamid.3"),
    ]
    assert messages[0].profile_name == "Asha"
    assert messages[0].timestamp == "1700000000"
    assert messages[1].profile_name is None


def test_status_updates_have_no_messages():
    body = _payload([], field="statuses")
    assert MetaTextExtractor.extract_messages(body) == []


def test_malformed_elements_are_skipped():
    good = {"from": "919800000001", "id": "wamid.1", "type": "text", "text": {"body": "TCS"}}
    body = {
        "object": "whatsapp_business_account",
        "entry": [
            "x",
            {"changes": "nope"},
            {"changes": [None, {"field": "messages", "value": ["bad"]}]},
            {
                "changes": [
                    {
                        "field": "messages",
                        "value": {
                            "contacts": ["bad", {"wa_id": ["list"]}, {"wa_id": "919800000001", "profile": "x"}],
                            "messages": [
                                7,
                                {"from": 5, "type": "text", "text": {"body": "hi"}},
                                {"from": "919800000002", "type": "text", "text": "flat"},
                                {"from": "919800000003", "id": 99, "type": "text", "text": {"body": "INFY"}},
                                good,
                            ],
                        },
                    }
                ]
            },
        ],
    }

    messages = MetaTextExtractor.extract_messages(body)

    assert [(m.sender, m.text, m.message_id) for m in messages] == [
        ("919800000003", "INFY", None),
        ("919800000001", "TCS", "wamid.1"),
    ]
    assert messages[1].profile_name is None


def test_entry_that_is_not_a_list():
    assert MetaTextExtractor.extract_messages({"entry": {"changes": []}}) == []
