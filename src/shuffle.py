# Simple k-shuffle, reduced to a single ILMP run on a 2n-length instance.
# http://web.cs.elte.hu/~rfid/p116-neff.pdf, section 4.

import ilmp
from errors import MalformedMessage, InvalidBase
from group import DEFAULT_PARAMS
from util import powm, modinv


def extend_secrets(x, y, c, d, t, params=DEFAULT_PARAMS):
	"""Returns the ILMP witness (phi, psi) for challenge t.

	phi = (x_0 - d*t, ..., x_(n-1) - d*t, c, ..., c)
	psi = (y_0 - c*t, ..., y_(n-1) - c*t, d, ..., d)
	"""
	q = params.q
	n = len(x)
	phi = [(x[i] - d * t) % q for i in range(n)] + [c % q] * n
	psi = [(y[i] - c * t) % q for i in range(n)] + [d % q] * n
	return phi, psi


def extend_public(X, Y, C, D, t, params=DEFAULT_PARAMS):
	"""Returns the ILMP statement (Phi, Psi) for challenge t.

	Phi = (X_0 * D^-t, ..., X_(n-1) * D^-t, C, ..., C)
	Psi = (Y_0 * C^-t, ..., Y_(n-1) * C^-t, D, ..., D)
	"""
	p = params.p
	n = len(X)
	U_inv = modinv(powm(D, t, p), p)
	W_inv = modinv(powm(C, t, p), p)
	Phi = [(X[i] * U_inv) % p for i in range(n)] + [C % p] * n
	Psi = [(Y[i] * W_inv) % p for i in range(n)] + [D % p] * n
	return Phi, Psi


def prove(chan, x, y, c, d, params=DEFAULT_PARAMS):
	"""Generate a zero-knowledge proof for the simple k-shuffle.

	chan: Channel to the verifier
	x, y: Logarithms of the public sequences X and Y
	c, d: Logarithms of the public blinding bases C and D
	params: Group parameters
	"""
	ilmp.check_lengths(chan, x, y)

	with chan.guard():
		# step 1
		t, = chan.expect('V1', 1)
		if not (1 <= t <= params.q_minus_one):
			raise MalformedMessage('malformed V1: challenge out of range')

		# step 2
		phi, psi = extend_secrets(x, y, c, d, t, params)

	# step 3
	ilmp.prove(chan, phi, psi, params)


def verify(chan, X, Y, C, D, params=DEFAULT_PARAMS):
	"""Verify a zero-knowledge proof for the simple k-shuffle.

	chan: Channel to the prover
	X, Y: Public sequences
	C, D: Public blinding bases G^c and G^d

	Returns whether the proof is accepted.
	"""
	ilmp.check_lengths(chan, X, Y)
	if not (0 < C % params.p and 0 < D % params.p):
		chan.abort()
		raise InvalidBase('blinding bases must be units mod P')

	with chan.guard():
		# step 1
		t = params.sample()
		chan.send([t])

		# step 2
		Phi, Psi = extend_public(X, Y, C, D, t, params)

	# step 3
	return ilmp.verify(chan, Phi, Psi, params)
