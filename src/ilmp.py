# Iterated logarithmic multiplication proof.
# http://web.cs.elte.hu/~rfid/p116-neff.pdf, section 3.

from errors import LengthMismatch, DegenerateWitness, MalformedMessage
from group import DEFAULT_PARAMS
from util import powm, modinv


def response_sign(n, i):
	"""Sign of the challenge term in the response r_i, i.e. (-1)^(n-i-1)."""
	return -1 if (n - i - 1) % 2 == 1 else 1


def first_exponent(n, gamma, q):
	"""Exponent of X_0 in the first verification equation."""
	return q - gamma if (n - 1) % 2 == 1 else gamma


def commitments(x, y, theta, params=DEFAULT_PARAMS):
	"""A_i = G^(x_i * theta_i) * G^(y_i * theta_(i+1)) mod P."""
	g, p, q = params.g, params.p, params.q
	return [(powm(g, (x[i] * theta[i]) % q, p) *
			powm(g, (y[i] * theta[i + 1]) % q, p)) % p for i in range(len(x))]


def responses(x, y, theta, gamma, params=DEFAULT_PARAMS):
	"""Computes the responses r_0, ..., r_(n-2).

	r_i = theta_(i+1) + (-1)^(n-i-1) * gamma * prod_(j>i) y_j / prod_(j>i) x_j
	"""
	q = params.q
	n = len(x)
	r = [0] * (n - 1)
	num = 1
	den = 1
	for i in range(n - 2, -1, -1):
		num = (num * y[i + 1]) % q
		den = (den * x[i + 1]) % q
		inv = modinv(den, q)
		if inv is None:
			raise DegenerateWitness('product of x[{}:] is not invertible mod Q'.format(i + 1))
		term = (gamma * num * inv) % q
		if response_sign(n, i) < 0:
			term = (q - term) % q
		r[i] = (theta[i + 1] + term) % q
	return r


def check_position(i, X, Y, A, r, gamma, params=DEFAULT_PARAMS):
	"""Checks the verification equation at position i.

	first:  Y_0^r_0 = A_0 * X_0^e, with e = -gamma if n - 1 is odd else gamma
	middle: X_i^r_(i-1) * Y_i^r_i = A_i
	last:   X_(n-1)^r_(n-2) = A_(n-1) * Y_(n-1)^-gamma
	For n = 1 the first and last equations coincide: Y_0^gamma = A_0 * X_0^gamma.
	"""
	p, q = params.p, params.q
	n = len(X)
	if n == 1:
		lhs = powm(Y[0], gamma, p)
		rhs = (A[0] * powm(X[0], gamma, p)) % p
	elif i == 0:
		lhs = powm(Y[0], r[0], p)
		rhs = (A[0] * powm(X[0], first_exponent(n, gamma, q), p)) % p
	elif i == n - 1:
		lhs = powm(X[i], r[i - 1], p)
		rhs = (A[i] * powm(Y[i], q - gamma, p)) % p
	else:
		lhs = (powm(X[i], r[i - 1], p) * powm(Y[i], r[i], p)) % p
		rhs = A[i] % p
	return lhs == rhs


def check_lengths(chan, a, b):
	"""Aborts chan and raises LengthMismatch unless a and b are non-empty and of equal length."""
	if len(a) != len(b):
		chan.abort()
		raise LengthMismatch('input lengths do not match: {} != {}'.format(len(a), len(b)))
	if len(a) == 0:
		chan.abort()
		raise LengthMismatch('input sequences are empty')


def prove(chan, x, y, params=DEFAULT_PARAMS):
	"""Prover role for ILMP.

	chan: Channel to the verifier
	x, y: Logarithms of the public sequences X and Y, with prod(x) = prod(y) mod Q
	params: Group parameters
	"""
	check_lengths(chan, x, y)
	n = len(x)
	q = params.q

	with chan.guard():
		x = [v % q for v in x]
		y = [v % q for v in y]
		for j in range(1, n):
			if x[j] == 0:
				raise DegenerateWitness('x[{}] is zero mod Q'.format(j))

		# step 1
		theta = [0] + [params.sample() for _ in range(n - 1)] + [0]
		chan.send(commitments(x, y, theta, params))

		# step 2
		gamma, = chan.expect('V1', 1)
		if not (1 <= gamma <= params.q_minus_one):
			raise MalformedMessage('malformed V1: challenge out of range')

		# step 3
		chan.send(responses(x, y, theta, gamma, params))


def verify(chan, X, Y, params=DEFAULT_PARAMS):
	"""Verifier role for ILMP.

	chan: Channel to the prover
	X, Y: Public sequences of subgroup elements

	Returns whether the proof is accepted.
	"""
	check_lengths(chan, X, Y)
	n = len(X)

	with chan.guard():
		# step 1
		A = chan.expect('P1', n)

		# step 2
		gamma = params.sample()
		chan.send([gamma])

		# step 3
		r = [v % params.q for v in chan.expect('P2', n - 1)]

	# step 4
	return all(check_position(i, X, Y, A, r, gamma, params) for i in range(n))
