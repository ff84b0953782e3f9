import sys
import json
from Crypto.Random import random

from errors import EntropyFailure


class Constants:
	# RFC 5114, section 2.1: 1024-bit MODP group with 160-bit prime order subgroup
	P_HEX = ('B10B8F96A080E01DDE92DE5EAE5D54EC52C99FBCFB06A3C69A6A' +
			'9DCA52D23B616073E28675A23D189838EF1E2EE652C013ECB4AEA906' +
			'112324975C3CD49B83BFACCBDD7D90C4BD7098488E9C219A73724EFF' +
			'D6FAE5644738FAA31A4FF55BCCC0A151AF5F0DC8B4BD45BF37DF365C' +
			'1A65E68CFDA76D4DA708DF1FB2BC2E4A4371')  # prime modulo
	G_HEX = ('A4D1CBD5C3FD34126765A442EFB99905F8104DD258AC507FD640' +
			'6CFF14266D31266FEA1E5C41564B777E690F5504F213160217B4B01B' +
			'886A5E91547F9E2749F4D7FBD7D3B9A92EE1909D0D2263F80A76A6A2' +
			'4C087A091F531DBF0A0169B6A28AD662A4D18E73AFA32D779D5918D0' +
			'8BC8858F4DCEF97C2A24855E6EEB22B3B2E5')  # generator
	Q_HEX = 'F518AA8781A8DF278ABA4E7D64B7CB9D49462353'  # subgroup

	INTEGER_SIZE = 8  # number of bytes that will be used to denote the size of payload
	BUFFER_SIZE = 4096  # socket buffer receive buffer size
	ENCODING = 'UTF-8'  # socket encoding

	SENTINEL = 0xFF  # message codec delimiter byte
	CODEC_OVERHEAD = 4  # bytes of the modulus reserved by the codec

	# role names used when printing
	PROVER = 'PROVER'
	VERIFIER = 'VERIFIER'
	MIX = 'MIX'


def send(s, args):
	"""Send arguments through socket s."""
	msg = json.dumps(args).encode(Constants.ENCODING)
	s.sendall(len(msg).to_bytes(Constants.INTEGER_SIZE, byteorder='big') + msg)


def _recvall(s, remaining):
	"""Reads exactly remaining bytes from s, or None if s hits EOF first."""
	chunks = []
	while remaining > 0:
		chunk = s.recv(min(Constants.BUFFER_SIZE, remaining))
		if not chunk:
			return None
		remaining -= len(chunk)
		chunks.append(chunk)
	return b''.join(chunks)


def recv(s):
	"""Receive arguments through socket s.

	Returns None when the peer has closed the socket.
	"""
	header = _recvall(s, Constants.INTEGER_SIZE)
	if header is None:
		return None
	payload = _recvall(s, int.from_bytes(header, byteorder='big'))
	if payload is None:
		return None
	return json.loads(payload.decode(Constants.ENCODING))


def powm(base, exp, mod):
	"""Modular exponentiation."""
	return pow(base, exp, mod)


def egcd(b, a):
	"""Extended euclidean algorithm."""
	x0, x1, y0, y1 = 1, 0, 0, 1
	while a != 0:
		q, b, a = b // a, a, b % a
		x0, x1 = x1, x0 - q * x1
		y0, y1 = y1, y0 - q * y1
	return  b, x0, y0


def modinv(num, mod):
	"""Modular inverse, or None if num is not invertible."""
	g, inv, _ = egcd(num % mod, mod)
	return (inv % mod) if g == 1 else None


def divide(a, b, p):
	"""Modular division."""
	m = modinv(b, p)
	return (m * a) % p if m is not None else None


def randkey(start, end):
	"""Returns a uniformly random integer in [start, end] from the secure source."""
	try:
		return random.randint(start, end)
	except OSError as err:
		raise EntropyFailure('secure random source failed: {}'.format(err)) from err


def sprint(name, s):
	"""Prints."""
	print('[{}] {}'.format(name, s))


def eprint(name, err):
	"""Prints error."""
	print('[{}] {}'.format(name, err), file=sys.stderr)
