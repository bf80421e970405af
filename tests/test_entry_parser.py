#!/usr/bin/env python3
"""
Tests for method and type entry extraction.
"""

import sys

from docparse.document import DocumentView
from docparse.entry_parser import (
    EntryNotFoundError,
    MethodParser,
    ReturnTypeNotFoundError,
    TypeParser,
    is_optional_description,
)
from docparse.type_refs import TypeRef
from sample_docs import SAMPLE_HTML


def sample_doc():
    return DocumentView.from_html(SAMPLE_HTML)


def test_method_basic():
    method = MethodParser(sample_doc()).parse("sendmessage")

    assert method.name == "sendMessage"
    assert method.tags == ["Available methods"]
    assert method.description == [
        "Use this method to send text messages. On success, the sent Message is returned.",
    ]
    assert method.notes == ["Text must be 1-4096 characters after entities parsing."]
    assert method.return_type == TypeRef("Message")
    assert list(method.params) == ["chat_id", "text", "reply_markup"]


def test_method_param_decoding():
    params = MethodParser(sample_doc()).parse("sendmessage").params

    assert params["text"].required
    assert params["text"].type_ref == TypeRef("String")

    markup = params["reply_markup"]
    assert not markup.required
    assert markup.type_ref.raw_type == (
        "InlineKeyboardMarkup or ReplyKeyboardMarkup or ReplyKeyboardRemove or ForceReply"
    )
    assert markup.description == "Additional interface options"


def test_chat_id_is_forced():
    params = MethodParser(sample_doc()).parse("sendmessage").params
    assert params["chat_id"].type_ref == TypeRef("Integer")
    assert params["chat_id"].required


def test_optional_marker_column():
    params = MethodParser(sample_doc()).parse("editmessagetext").params
    assert not params["message_id"].required
    assert params["text"].required


def test_return_type_after_table():
    method = MethodParser(sample_doc()).parse("sendmediagroup")
    assert method.return_type == TypeRef("Array of Messages")
    assert len(method.description) == 2


def test_return_type_alternatives():
    method = MethodParser(sample_doc()).parse("editmessagetext")
    assert method.return_type == TypeRef("Message or True")


def test_method_without_params():
    method = MethodParser(sample_doc()).parse("getme")
    assert method.params == {}
    assert method.return_type == TypeRef("User")


def test_return_type_not_found():
    try:
        MethodParser(sample_doc()).parse("brokenmethod")
    except ReturnTypeNotFoundError as e:
        assert e.anchor == "brokenmethod"
        assert e.name == "brokenMethod"
    else:
        raise AssertionError("expected ReturnTypeNotFoundError")


def test_entry_not_found():
    try:
        TypeParser(sample_doc()).parse("chatmember")
    except EntryNotFoundError as e:
        assert e.matches == 0
    else:
        raise AssertionError("expected EntryNotFoundError")


def test_ambiguous_entry():
    html = """
    <h4><a class="anchor" name="user"></a>User</h4><p>First.</p>
    <h4><a class="anchor" name="user"></a>User</h4><p>Second.</p>
    """
    try:
        TypeParser(DocumentView.from_html(html)).parse("user")
    except EntryNotFoundError as e:
        assert e.matches == 2
    else:
        raise AssertionError("expected EntryNotFoundError")


def test_type_fields():
    type_def = TypeParser(sample_doc()).parse("user")

    assert type_def.name == "User"
    assert type_def.tag == "Available types"
    assert type_def.description == ["This object represents a Telegram user or bot."]
    # The decorative row with a blank name is dropped
    assert [f.name for f in type_def.fields] == ["id", "is_bot", "first_name", "username"]

    fields = {f.name: f for f in type_def.fields}
    assert fields["first_name"].required
    assert not fields["username"].required
    assert fields["is_bot"].description == "True, if this user is a bot"


def test_sixty_four_bit_description_forces_type():
    fields = {f.name: f for f in TypeParser(sample_doc()).parse("user").fields}
    assert fields["id"].type_ref == TypeRef("Integer64")
    assert fields["id"].required


def test_chat_id_field_forced_required():
    fields = {f.name: f for f in TypeParser(sample_doc()).parse("message").fields}
    assert fields["migrate_to_chat_id"].type_ref == TypeRef("Integer64")
    assert fields["migrate_to_chat_id"].required
    assert fields["photo"].type_ref == TypeRef("Array of PhotoSize")
    assert fields["from"].type_ref == TypeRef("User")


def test_type_lists_are_flattened():
    type_def = TypeParser(sample_doc()).parse("inputmedia")
    assert type_def.fields == []
    assert type_def.description == [
        "This object represents the content of a media message to be sent. It should be one of",
        "InputMediaPhoto",
        "InputMediaVideo",
    ]


def test_type_without_fields():
    type_def = TypeParser(sample_doc()).parse("inputfile")
    assert type_def.fields == []
    assert type_def.notes == []


def test_is_optional_description():
    assert is_optional_description("Optional. Sender")
    assert is_optional_description("  optional sender")
    assert not is_optional_description("Unique identifier")


def main():
    tests = [value for name, value in globals().items() if name.startswith("test_")]
    print("🧪 Testing entry extraction")
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
