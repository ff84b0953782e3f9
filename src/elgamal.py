from group import DEFAULT_PARAMS


class PublicKey:
	"""Public key Y = G^X mod P."""

	def __init__(self, params, y):
		self.params = params
		self.y = y

	def __eq__(self, other):
		if not isinstance(other, PublicKey):
			return NotImplemented
		return self.params == other.params and self.y == other.y

	def __hash__(self):
		return hash((self.params, self.y))

	def __repr__(self):
		return 'PublicKey(y=0x{:x})'.format(self.y)


class SecretKey:
	"""Secret exponent X in [1, Q-1]. Never serialized."""

	def __init__(self, params, x):
		self.params = params
		self.x = x
		self.q_minus_x = params.q - x

	def public_key(self):
		return PublicKey(self.params, self.params.powm(self.params.g, self.x))

	def __repr__(self):
		return 'SecretKey(<hidden>)'


def generate_keys(params=DEFAULT_PARAMS):
	"""Chooses a random exponent and returns a (public, secret) key pair."""
	sk = SecretKey(params, params.sample())
	return sk.public_key(), sk


def encrypt(pk, M):
	"""ElGamal encryption of the element M of Z/P.

	Returns the ciphertext (R, C) = (G^r, M * Y^r) for a fresh r.
	"""
	params = pk.params
	r = params.sample()
	R = params.powm(params.g, r)
	C = (M * params.powm(pk.y, r)) % params.p
	return R, C


def decrypt(sk, R, C):
	"""ElGamal decryption, M = C * R^(Q-X) mod P.

	A ciphertext that was not produced under the matching key decrypts to a
	meaningless element; no integrity check happens here.
	"""
	params = sk.params
	return (C * params.powm(R, sk.q_minus_x)) % params.p


def encrypt_message(pk, msg):
	"""Encodes the byte string msg and encrypts it."""
	return encrypt(pk, pk.params.encode(msg))


def decrypt_message(sk, R, C):
	"""Decrypts (R, C) and decodes the plaintext back into bytes."""
	return sk.params.decode(decrypt(sk, R, C))
