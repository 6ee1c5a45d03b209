"""
cascade_cipher — Core Test Suite
================================
Run with:  python -m pytest tests/ -v
       or:  python tests/test_cascade.py
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from cascade_cipher.errors                     import (CipherError, DefensiveInvariantError,
                                                       ErrorKind, RequestError, ValidationError)
from cascade_cipher.validation                 import validate
from cascade_cipher.keytable                   import (ALPHA, KeyTable, ReverseKeyTable,
                                                       build_key_table, build_reverse_key_table)
from cascade_cipher.layers.layer1_substitution import encode, decode
from cascade_cipher.layers.layer2_groups       import apply_reversal, undo_reversal
from cascade_cipher.cipher                     import CascadeCipher, CipherRequest, run
from cascade_cipher.messages                   import MessageStore
from cascade_cipher.config                     import Settings

KEY  = "KOD"
KEYS = ["KOD", "ZEBRA", "CASCADE", "AAB", "ZZZY", "QWERTYUIOPASDFGHJKLZXCVBNM"]

# ── Validation ────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("text,key,kind", [
    ("TEST",  "",     ErrorKind.INVALID_KEY_FORMAT),
    ("TEST",  "kod",  ErrorKind.INVALID_KEY_FORMAT),
    ("TEST",  "K0D",  ErrorKind.INVALID_KEY_FORMAT),
    ("TEST1", "ab",   ErrorKind.INVALID_KEY_FORMAT),
    ("TEST",  "AB",   ErrorKind.INVALID_KEY_LENGTH),
    ("TEST1", "AB",   ErrorKind.INVALID_KEY_LENGTH),
    ("TEST1", "KOD",  ErrorKind.INVALID_TEXT_FORMAT),
    ("test",  "KOD",  ErrorKind.INVALID_TEXT_FORMAT),
    ("A-B",   "KOD",  ErrorKind.INVALID_TEXT_FORMAT),
])
def test_validate_rejects(text, key, kind):
    with pytest.raises(ValidationError) as exc:
        validate(text, key)
    assert exc.value.kind == kind

def test_validate_accepts_spaces_and_empty_text():
    validate("HELLO WORLD", KEY)
    validate("", KEY)
    validate("   ", KEY)

def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        validate("TEST", "AB")

# ── Key tables ────────────────────────────────────────────────────────────────
def test_key_table_kod():
    t = build_key_table(KEY)
    assert [t.rank(c) for c in "KOD"] == [1, 2, 3]
    assert [t.rank(c) for c in "ABCE"] == [4, 5, 6, 7]
    assert t.rank("T") == 20
    assert t.rank("Z") == 26

@pytest.mark.parametrize("key", KEYS)
def test_key_table_is_bijection(key):
    t = build_key_table(key)
    assert sorted(rank for _, rank in t.items()) == list(range(1, 27))
    r = build_reverse_key_table(t)
    for letter in ALPHA:
        assert r.letter(t.rank(letter)) == letter

def test_key_table_repeated_letters_keep_first_rank():
    t = build_key_table("ZZZY")
    assert t.rank("Z") == 1
    assert t.rank("Y") == 2
    assert t.rank("A") == 3
    assert t.rank("X") == 26

def test_key_table_rejects_non_bijection():
    with pytest.raises(DefensiveInvariantError):
        KeyTable(tuple([1] * 26))

def test_key_table_unknown_character():
    t = build_key_table(KEY)
    with pytest.raises(DefensiveInvariantError) as exc:
        t.rank("1")
    assert exc.value.kind == ErrorKind.UNKNOWN_CHARACTER

def test_reverse_table_out_of_range():
    r = build_reverse_key_table(build_key_table(KEY))
    for bad in (0, 27, -3):
        with pytest.raises(DefensiveInvariantError) as exc:
            r.letter(bad)
        assert exc.value.kind == ErrorKind.UNDECODABLE_CHARACTER

def test_reverse_table_kod():
    r = build_reverse_key_table(build_key_table(KEY))
    assert isinstance(r, ReverseKeyTable)
    assert r.letter(1) == "K"
    assert r.letter(4) == "A"
    assert r.letter(26) == "Z"

# ── Layer 1: cascade substitution ─────────────────────────────────────────────
def test_encode_known_vector():
    assert encode("TEST", KEY, 3) == "WDWQ"

def test_decode_known_vector():
    assert decode("WDWQ", KEY, 3) == "TEST"

def test_encode_with_groups_known_vector():
    assert encode("DUPA", KEY, 3, reverse_groups=True) == "XUQAF"
    assert decode("XUQAF", KEY, 3, reverse_groups=True) == "DUPA"

def test_encode_strips_spaces():
    assert encode("TE ST", KEY, 3) == "WDWQ"
    assert decode("WD WQ", KEY, 3) == "TEST"

@pytest.mark.parametrize("start", [3, 29, -23, 3 + 26 * 40])
def test_start_number_is_taken_mod_26(start):
    assert encode("TEST", KEY, start) == "WDWQ"
    assert decode("WDWQ", KEY, start) == "TEST"

def test_same_letters_do_not_repeat():
    ct = encode("AAAAAAAAAA", KEY, 1)
    assert len(set(ct)) > 1

def test_encode_only_emits_uppercase():
    ct = encode("THE QUICK BROWN FOX JUMPS OVER THE LAZY DOG", "ZEBRA", -1000)
    assert set(ct) <= set(ALPHA)

@pytest.mark.parametrize("key", KEYS)
@pytest.mark.parametrize("start", [-53, -1, 0, 1, 13, 26, 27, 999])
def test_roundtrip(key, start):
    msg = "ATTACK AT DAWN AND HOLD THE BRIDGE"
    assert decode(encode(msg, key, start), key, start) == msg.replace(" ", "")

@pytest.mark.parametrize("start", [-7, 3, 100])
def test_roundtrip_with_groups(start):
    for msg in ("A", "HELLO", "HELLO WORLD", "MEET ME AT NOON"):
        if encode(msg, "CASCADE", start).endswith("X"):
            continue  # indistinguishable from padding
        ct = encode(msg, "CASCADE", start, reverse_groups=True)
        assert len(ct) % 5 == 0
        assert decode(ct, "CASCADE", start, reverse_groups=True) == msg.replace(" ", "")

def test_empty_text():
    assert encode("", KEY, 5) == ""
    assert encode("   ", KEY, 5) == ""
    assert decode("", KEY, 5) == ""
    assert encode("", KEY, 5, reverse_groups=True) == ""
    assert decode("", KEY, 5, reverse_groups=True) == ""

def test_trailing_x_is_lost():
    ct = encode("BOX", KEY, 4)
    assert decode(ct, KEY, 4) == "BO"

def test_encode_propagates_validation():
    with pytest.raises(ValidationError) as exc:
        encode("TEST", "AB", 3)
    assert exc.value.kind == ErrorKind.INVALID_KEY_LENGTH
    with pytest.raises(ValidationError) as exc:
        decode("TEST1", KEY, 3)
    assert exc.value.kind == ErrorKind.INVALID_TEXT_FORMAT

# ── Layer 2: block reversal ───────────────────────────────────────────────────
def test_apply_reversal_pads_and_reverses():
    assert apply_reversal("FAQU") == "XUQAF"
    assert apply_reversal("HELLO WORLD") == "OLLEHDLROW"
    assert apply_reversal("ABCDEFG") == "EDCBAXXXGF"
    assert apply_reversal("") == ""

@pytest.mark.parametrize("text", ["A", "ABCD", "ABCDE", "ABCDEF", "AB CD EF GH IJ K"])
def test_apply_reversal_length_multiple_of_five(text):
    assert len(apply_reversal(text)) % 5 == 0

@pytest.mark.parametrize("text", ["A", "ABCDE", "ABC DEF GHI", "XYZ"])
def test_undo_reversal_restores_padded_form(text):
    clean  = text.replace(" ", "")
    padded = clean + "X" * (-len(clean) % 5)
    assert undo_reversal(apply_reversal(text)) == padded

def test_undo_reversal_tolerates_short_final_block():
    assert undo_reversal("ABCDEFG") == "EDCBAGF"
    assert undo_reversal("XUQAF") == "FAQUX"

# ── CascadeCipher + request boundary ─────────────────────────────────────────
def test_cascade_cipher_facade():
    c = CascadeCipher()
    assert c.encrypt("TEST", KEY, 3) == "WDWQ"
    assert c.decrypt("WDWQ", KEY, 3) == "TEST"

def test_request_from_dict():
    req = CipherRequest.from_dict({"text": "TEST", "key": KEY,
                                   "startNumber": 3, "operation": "encrypt"})
    assert req.reverse_groups is False
    assert req.start_number == 3

@pytest.mark.parametrize("patch,field", [
    ({"text": ""},               "text"),
    ({"text": 5},                "text"),
    ({"key": None},              "key"),
    ({"startNumber": "3"},       "startNumber"),
    ({"startNumber": 3.5},       "startNumber"),
    ({"startNumber": True},      "startNumber"),
    ({"reverseGroups": "yes"},   "reverseGroups"),
    ({"operation": "ENCRYPT"},   "operation"),
])
def test_request_from_dict_rejects(patch, field):
    payload = {"text": "TEST", "key": KEY, "startNumber": 3, "operation": "encrypt"}
    payload.update(patch)
    with pytest.raises(RequestError) as exc:
        CipherRequest.from_dict(payload)
    assert exc.value.field == field
    assert exc.value.kind == ErrorKind.INVALID_REQUEST

def test_run_success():
    out = run(CipherRequest("DUPA", KEY, 3, "encrypt", True))
    assert out.ok
    assert out.to_dict() == {"result": "XUQAF"}
    back = run(CipherRequest(out.result, KEY, 3, "decrypt", True))
    assert back.result == "DUPA"

def test_run_returns_error_instead_of_raising():
    out = run(CipherRequest("TEST", "AB", 3, "encrypt"))
    assert not out.ok
    assert out.result is None
    assert out.error.kind == ErrorKind.INVALID_KEY_LENGTH
    assert out.to_dict()["kind"] == "InvalidKeyLength"

def test_run_unknown_operation():
    out = run(CipherRequest("TEST", KEY, 3, "rot13"))
    assert isinstance(out.error, CipherError)
    assert out.error.kind == ErrorKind.INVALID_REQUEST

# ── Message store ─────────────────────────────────────────────────────────────
def test_store_create_list_delete():
    store = MessageStore()
    a = store.create("alice", "HELLO", is_encrypted=False)
    b = store.create("bob", "WDWQ", cipher_key=KEY, start_number=3)
    assert [m.id for m in store.list()] == [a.id, b.id]
    assert store.delete(a.id) is True
    assert store.delete(a.id) is False
    assert [m.id for m in store.list()] == [b.id]
    assert len(store) == 1

def test_store_rejects_empty_fields():
    store = MessageStore()
    with pytest.raises(RequestError):
        store.create("", "HELLO")
    with pytest.raises(RequestError):
        store.create("alice", "")

def test_store_decode():
    store = MessageStore()
    m = store.create("bob", "XUQAF", cipher_key=KEY, start_number=3, reverse_groups=True)
    assert store.decode(m.id) == "DUPA"

def test_store_decode_needs_parameters():
    store = MessageStore()
    m = store.create("alice", "HELLO", is_encrypted=False)
    with pytest.raises(RequestError):
        store.decode(m.id)
    with pytest.raises(KeyError):
        store.decode("missing")

def test_message_to_dict_uses_camel_case():
    m = MessageStore().create("bob", "WDWQ", cipher_key=KEY, start_number=3)
    d = m.to_dict()
    assert d["isEncrypted"] is True
    assert d["cipherKey"] == KEY
    assert d["startNumber"] == 3
    assert d["reverseGroups"] is False
    assert "T" in d["timestamp"]

# ── Settings ──────────────────────────────────────────────────────────────────
def test_settings_defaults():
    s = Settings.from_env({})
    assert (s.host, s.port, s.debug, s.log_level) == ("0.0.0.0", 5000, False, "INFO")

def test_settings_from_env():
    s = Settings.from_env({"CASCADE_PORT": "8080", "CASCADE_DEBUG": "TRUE",
                           "CASCADE_LOG_LEVEL": "debug"})
    assert s.port == 8080
    assert s.debug is True
    assert s.log_level == "DEBUG"

@pytest.mark.parametrize("port", ["abc", "0", "70000"])
def test_settings_bad_port(port):
    with pytest.raises(ValueError):
        Settings.from_env({"CASCADE_PORT": port})

# ── run directly ─────────────────────────────────────────────────────────────
if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
