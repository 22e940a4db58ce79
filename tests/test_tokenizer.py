import pytest

from embee.tokenizer import CharTokenizer, Tokenizer


@pytest.fixture
def tok():
    return CharTokenizer()


def test_tokenizer_is_abstract():
    with pytest.raises(TypeError):
        Tokenizer()


def test_encode_ascii_gives_character_codes(tok):
    assert tok.encode("Hi") == [ord("H"), ord("i")]


@pytest.mark.parametrize("text", ["", "hello world", "User: hi\n\nAssistant: ", "caf\u00e9 \u2603"])
def test_round_trip(tok, text):
    assert tok.decode(tok.encode(text)) == text


def test_encoded_ids_fit_vocab(tok):
    ids = tok.encode("\u00fcber \u2603 text")
    assert all(0 <= i < tok.vocab_size() for i in ids)


def test_single_ascii_token_decodes(tok):
    assert tok.decode([ord("a")]) == "a"


def test_decode_wraps_to_byte(tok):
    assert tok.decode([ord("A") + 256]) == "A"


def test_special_tokens(tok):
    assert tok.vocab_size() == 256
    assert tok.bos_token() == 1
    assert tok.eos_token() == 2
    assert tok.pad_token() == 0