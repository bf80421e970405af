#!/usr/bin/env python3
"""
Tests for return type inference from method descriptions.
Sentences are taken from (or modelled on) the Bot API documentation.
"""

import sys

from docparse.return_types import (
    extract_return_type_from_sentence,
    infer_return_type,
    looks_like_return_type,
    normalize_return_phrase,
    split_into_sentences,
)


def test_sent_message_is_returned():
    paragraphs = ["Use this method to send text messages. On success, the sent Message is returned."]
    assert infer_return_type(paragraphs) == "Message"


def test_otherwise_alternative():
    paragraphs = ["On success, if the message is not an inline message, the Message is returned, "
                  "otherwise True is returned."]
    assert infer_return_type(paragraphs) == "Message or True"


def test_no_return_phrase():
    assert infer_return_type(["Use this method to do something useful."]) is None
    assert infer_return_type([]) is None
    assert infer_return_type([""]) is None


def test_returns_clause():
    cases = {
        "Returns True on success.": "True",
        "Returns the uploaded File on success.": "File",
        "Returns an Array of Update objects.": "Array of Update",
        "Returns basic information about the bot in form of a User object.": "User",
        "Returns the MessageId of the sent message on success.": "MessageId",
        "Returns the new invite link as ChatInviteLink object.": "ChatInviteLink",
        "Returns the created invoice link as String on success.": "String",
        "Returns Int on success.": "Int",
        "Returns the number of members in a chat.": "",
    }
    for sentence, expected in cases.items():
        assert extract_return_type_from_sentence(sentence) == expected, sentence


def test_returns_stops_at_punctuation_and_markers():
    assert extract_return_type_from_sentence("Returns True, if the bot is an admin.") == "True"
    assert extract_return_type_from_sentence("Returns WebhookInfo (empty if not set).") == "WebhookInfo"
    assert extract_return_type_from_sentence("Returns Message when the call succeeds") == "Message"


def test_on_success_returns():
    assert extract_return_type_from_sentence("On success, returns a Poll object.") == "Poll"


def test_array_is_returned():
    sentence = "On success, an array of Messages that were sent is returned."
    assert extract_return_type_from_sentence(sentence) == "Array of Messages"


def test_are_returned():
    sentence = "On success, the stopped Poll objects are returned."
    assert extract_return_type_from_sentence(sentence) == "Poll"


def test_first_matching_sentence_wins():
    paragraphs = [
        "Use this method to get up to date information about the chat.",
        "Returns a ChatFullInfo object on success. Returns True otherwise.",
    ]
    assert infer_return_type(paragraphs) == "ChatFullInfo"


def test_lowercase_candidate_rejected():
    paragraphs = [
        "Returns nothing useful.",
        "On success, a File object is returned.",
    ]
    assert infer_return_type(paragraphs) == "File"


def test_normalize_return_phrase():
    assert normalize_return_phrase("the sent Message") == "Message"
    assert normalize_return_phrase("an array of Message objects that were sent") == "Array of Message"
    assert normalize_return_phrase("information about the chat as a Chat object") == "Chat"
    assert normalize_return_phrase("the revoked invite link as ChatInviteLink object") == "ChatInviteLink"
    assert normalize_return_phrase("string") == "String"
    assert normalize_return_phrase("true") == "True"


def test_array_item_survives_suffix_stripping():
    assert normalize_return_phrase("an array of Messages that were sent") == "Array of Messages"
    assert normalize_return_phrase("Array of Messages") == "Array of Messages"
    assert normalize_return_phrase("Array of Array of Messages") == "Array of Array of Messages"


def test_looks_like_return_type():
    assert looks_like_return_type("Message")
    assert looks_like_return_type("integer")
    assert looks_like_return_type("array of Update")
    assert not looks_like_return_type("")
    assert not looks_like_return_type("nothing")
    assert not looks_like_return_type("Array")
    assert not looks_like_return_type("array of")


def test_split_into_sentences():
    assert split_into_sentences("One. Two! Three? tail") == ["One.", "Two!", "Three?", "tail"]
    assert split_into_sentences("   ") == []


def main():
    tests = [value for name, value in globals().items() if name.startswith("test_")]
    print("🧪 Testing return type inference")
    print("=" * 50)

    failed = 0
    for test in tests:
        try:
            test()
            print(f"   ✅ {test.__name__}")
        except AssertionError as e:
            failed += 1
            print(f"   ❌ {test.__name__}: {e}")

    print(f"\n📊 {len(tests) - failed}/{len(tests)} passed")
    return failed == 0


if __name__ == "__main__":
    sys.exit(0 if main() else 1)
