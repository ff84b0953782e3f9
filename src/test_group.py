import pytest

import util
from errors import EntropyFailure, ParseError, MessageTooLarge, DecodeError
from group import GroupParameters, parse_params, DEFAULT_PARAMS
from testing_helpers import SMALL_PARAMS
from util import Constants


def test_parse_params():
	params = parse_params(Constants.P_HEX, Constants.G_HEX, Constants.Q_HEX)
	assert params == DEFAULT_PARAMS
	assert params.q == int(Constants.Q_HEX, 16)
	assert params.one == 1
	assert params.q_minus_one == params.q - 1
	assert params.p.bit_length() == 1024
	assert params.powm(params.g, params.q) == 1


def test_parse_params_lowercase():
	params = parse_params('17', '4', 'b')
	assert params == SMALL_PARAMS


@pytest.mark.parametrize('p, g, q', [
	('xyz', '4', 'b'),
	('17', '', 'b'),
	('17', '4', 'not hex'),
	('17', '4', None),
	('1_7', '4', 'b'),
	('0x17', '4', 'b'),
	(' 17 ', '4', 'b'),
	('17', '+4', 'b'),
	('17', '4', '-b'),
])
def test_parse_params_invalid_hex(p, g, q):
	with pytest.raises(ParseError):
		parse_params(p, g, q)


def test_inconsistent_params():
	# 5 generates all of (Z/23Z)*, order 22
	with pytest.raises(ParseError):
		GroupParameters(23, 5, 11)
	# 7 does not divide 22
	with pytest.raises(ParseError):
		GroupParameters(23, 4, 7)
	with pytest.raises(ParseError):
		GroupParameters(23, 1, 11)


def test_params_immutable():
	with pytest.raises(AttributeError):
		SMALL_PARAMS.q = 5
	with pytest.raises(AttributeError):
		SMALL_PARAMS.extra = 1


def test_is_prime():
	assert DEFAULT_PARAMS.is_prime()
	assert SMALL_PARAMS.is_prime()


def test_sample_range():
	draws = [SMALL_PARAMS.sample() for _ in range(2000)]
	assert set(draws) == set(range(1, 11))


def test_sample_entropy_failure(monkeypatch):
	def fail(a, b):
		raise OSError('no entropy')
	monkeypatch.setattr(util.random, 'randint', fail)
	with pytest.raises(EntropyFailure):
		DEFAULT_PARAMS.sample()


def test_max_msg_bytes():
	assert DEFAULT_PARAMS.max_msg_bytes == 1024 // 8 - 4
	assert SMALL_PARAMS.max_msg_bytes < 0


@pytest.mark.parametrize('msg', [
	b'',
	b'1',
	b'hello world',
	b'\x00',
	b'trailing zeros\x00\x00\x00',
	b'\x00\x00leading zeros',
	b'\xff' * 16,
	bytes(range(124)),
])
def test_encode_decode(msg):
	M = DEFAULT_PARAMS.encode(msg)
	assert 0 < M < DEFAULT_PARAMS.p
	assert DEFAULT_PARAMS.decode(M) == msg


def test_encode_random_messages():
	for n in range(DEFAULT_PARAMS.max_msg_bytes + 1):
		msg = util.random.getrandbits(8 * n).to_bytes(n, byteorder='big') if n else b''
		assert DEFAULT_PARAMS.decode(DEFAULT_PARAMS.encode(msg)) == msg


def test_encode_too_large():
	with pytest.raises(MessageTooLarge):
		DEFAULT_PARAMS.encode(bytes(DEFAULT_PARAMS.max_msg_bytes + 1))
	with pytest.raises(MessageTooLarge):
		SMALL_PARAMS.encode(b'')


@pytest.mark.parametrize('M', [0, 1, 0xFF, 0x01FF00, 0xFF01])
def test_decode_garbage(M):
	with pytest.raises(DecodeError):
		DEFAULT_PARAMS.decode(M)
