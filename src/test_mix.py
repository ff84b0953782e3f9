from collections import Counter
from itertools import permutations

import pytest

import mix
import util
from elgamal import generate_keys, encrypt_message
from errors import EntropyFailure, LengthMismatch, NotAPermutation
from group import DEFAULT_PARAMS
from util import Constants

CHI_SQUARE_23_DOF = 49.73  # critical value for 23 degrees of freedom, p = 0.001


@pytest.mark.parametrize('n', [0, 1, 2, 3, 10, 100])
def test_generate_permutation(n):
	for _ in range(20):
		pi = mix.generate_permutation(n)
		assert sorted(pi) == list(range(n))
		assert mix.is_permutation(pi)


def test_generate_permutation_draw_ranges(monkeypatch):
	calls = []
	def record(start, end):
		calls.append((start, end))
		return end
	monkeypatch.setattr(mix, 'randkey', record)
	assert mix.generate_permutation(5) == [0, 1, 2, 3, 4]
	assert calls == [(0, 4), (0, 3), (0, 2), (0, 1)]


def test_generate_permutation_uniform():
	n = 4
	trials = 24000
	counts = Counter(tuple(mix.generate_permutation(n)) for _ in range(trials))
	assert set(counts) == set(permutations(range(n)))

	expected = trials / 24
	chi_square = sum((counts[pi] - expected) ** 2 / expected for pi in counts)
	assert chi_square < CHI_SQUARE_23_DOF


def test_generate_permutation_entropy_failure(monkeypatch):
	def fail(a, b):
		raise OSError('no entropy')
	monkeypatch.setattr(util.random, 'randint', fail)
	with pytest.raises(EntropyFailure):
		mix.generate_permutation(3)


def test_is_permutation():
	assert mix.is_permutation([])
	assert mix.is_permutation([2, 0, 1])
	assert not mix.is_permutation([0, 0, 1])
	assert not mix.is_permutation([0, 1, 3])
	assert not mix.is_permutation([-1, 0, 1])
	assert not mix.is_permutation([False, True])


def test_permute_and_invert():
	elts = ['a', 'b', 'c', 'd']
	pi = [2, 0, 3, 1]
	assert mix.permute(elts, pi) == ['b', 'd', 'a', 'c']
	pi_inv = mix.invert_permutation(pi)
	assert pi_inv == [1, 3, 0, 2]
	assert mix.permute(mix.permute(elts, pi), pi_inv) == elts
	with pytest.raises(NotAPermutation):
		mix.invert_permutation([1, 1])
	with pytest.raises(LengthMismatch):
		mix.permute(elts, [0, 1])


def _ciphertexts(n):
	pk, sk = generate_keys()
	msgs = [str(i + 1).encode(Constants.ENCODING) for i in range(n)]
	R, C = [], []
	for msg in msgs:
		R_i, C_i = encrypt_message(pk, msg)
		R.append(R_i)
		C.append(C_i)
	return sk, msgs, R, C


@pytest.mark.parametrize('n', [1, 2, 10])
def test_mix(n):
	sk, msgs, R, C = _ciphertexts(n)
	pi = mix.generate_permutation(n)
	M = mix.mix(sk, R, C, pi)
	assert len(M) == n
	for i in range(n):
		assert DEFAULT_PARAMS.decode(M[pi[i]]) == msgs[i]


def test_mix_identity_and_reverse():
	sk, msgs, R, C = _ciphertexts(3)
	M = mix.mix(sk, R, C, [0, 1, 2])
	assert [DEFAULT_PARAMS.decode(m) for m in M] == msgs
	M = mix.mix(sk, R, C, [2, 1, 0])
	assert [DEFAULT_PARAMS.decode(m) for m in M] == msgs[::-1]


def test_mix_empty():
	sk, _, _, _ = _ciphertexts(0)
	assert mix.mix(sk, [], [], []) == []


@pytest.mark.parametrize('pi', [
	[0, 0, 1],
	[1, 2, 1],
	[0, 1, 3],
	[-1, 0, 1],
	[0, 1, 2.0],
	[True, False, 2],
])
def test_mix_not_a_permutation(pi):
	sk, _, R, C = _ciphertexts(3)
	with pytest.raises(NotAPermutation):
		mix.mix(sk, R, C, pi)


def test_mix_length_mismatch():
	sk, _, R, C = _ciphertexts(3)
	with pytest.raises(LengthMismatch):
		mix.mix(sk, R, C[:2], [0, 1, 2])
	with pytest.raises(LengthMismatch):
		mix.mix(sk, R, C, [0, 1])
