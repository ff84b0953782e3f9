from elgamal import decrypt
from errors import LengthMismatch, NotAPermutation
from util import randkey


def generate_permutation(n):
	"""Returns a uniformly random permutation of the integers from 0 to n - 1.

	Knuth (Fisher-Yates) shuffle: for i from n - 1 down to 1, swap position i
	with a position drawn uniformly from [0, i], inclusive of i.
	"""
	pi = list(range(n))
	for i in range(n - 1, 0, -1):
		j = randkey(0, i)
		pi[i], pi[j] = pi[j], pi[i]
	return pi


def is_permutation(pi):
	"""Returns whether pi is a bijection on [0, len(pi))."""
	n = len(pi)
	seen = [False] * n
	for j in pi:
		if not isinstance(j, int) or isinstance(j, bool) or not (0 <= j < n) or seen[j]:
			return False
		seen[j] = True
	return True


def invert_permutation(pi):
	"""Returns the inverse of the permutation list pi."""
	if not is_permutation(pi):
		raise NotAPermutation('parameter is not a permutation')
	pi_inv = [0] * len(pi)
	for i, j in enumerate(pi):
		pi_inv[j] = i
	return pi_inv


def permute(elts, pi):
	"""Moves elts[i] to position pi[i]."""
	if len(elts) != len(pi):
		raise LengthMismatch(
				'sequence length mismatch: |elts|={}, |pi|={}'.format(len(elts), len(pi)))
	if not is_permutation(pi):
		raise NotAPermutation('parameter is not a permutation')
	out = [None] * len(elts)
	for i, elt in enumerate(elts):
		out[pi[i]] = elt
	return out


def mix(sk, R, C, pi):
	"""Decrypts the ciphertexts (R[i], C[i]) and applies the permutation pi.

	sk: Secret key used to decrypt
	R, C: Ciphertext components
	pi: Permutation list, the plaintext of input i lands at output pi[i]

	Returns the permuted plaintexts. Nothing is returned if pi turns out not
	to be a permutation.
	"""
	n = len(R)
	if len(C) != n:
		raise LengthMismatch(
				'sequence length mismatch: |R|={}, |C|={}'.format(n, len(C)))
	if len(pi) != n:
		raise LengthMismatch(
				'sequence length mismatch: |R|={}, |pi|={}'.format(n, len(pi)))

	M = [None] * n
	for i in range(n):
		j = pi[i]
		if not isinstance(j, int) or isinstance(j, bool) or not (0 <= j < n) or M[j] is not None:
			raise NotAPermutation('parameter is not a permutation (index {})'.format(i))
		M[j] = decrypt(sk, R[i], C[i])
	return M
