import socket
from threading import Thread

from channel import LocalChannel
from group import GroupParameters, DEFAULT_PARAMS
from mix import generate_permutation, permute
from util import modinv

TIMEOUT = 30  # seconds a protocol role may take before the test fails


def get_free_port():
	tcp = socket.socket()
	tcp.bind(('localhost', 0))
	addr, port = tcp.getsockname()
	tcp.close()
	return port


# toy group: 4 has order 11 in (Z/23Z)*
SMALL_PARAMS = GroupParameters(23, 4, 11)


class Party(Thread):
	"""Runs one protocol role on its own thread and keeps its outcome."""

	def __init__(self, role, chan):
		super().__init__(daemon=True)
		self.role = role
		self.chan = chan
		self.result = None
		self.error = None

	def run(self):
		try:
			self.result = self.role(self.chan)
		except Exception as err:
			self.error = err


def run_protocol(prove, verify, channel_cls=LocalChannel, timeout=TIMEOUT):
	"""Runs prove on a background thread and verify on this one.

	prove, verify: Callables taking a channel end
	channel_cls: Channel implementation providing pair()

	Returns (verifier result, prover exception or None).
	"""
	p_chan, v_chan = channel_cls.pair()
	prover = Party(prove, p_chan)
	prover.start()
	try:
		result = verify(v_chan)
	finally:
		prover.join(timeout)
		p_chan.close()
		v_chan.close()
	assert not prover.is_alive(), 'prover did not terminate'
	return result, prover.error


def exps(xs, params=DEFAULT_PARAMS):
	"""Returns [G^x for x in xs]."""
	return [params.powm(params.g, x) for x in xs]


def ilmp_instance(n, valid=True, params=DEFAULT_PARAMS):
	"""Builds logarithms x, y with prod(x) = prod(y) mod Q (or not, if not valid).

	Returns (x, y, X, Y).
	"""
	q = params.q
	x = [params.sample() for _ in range(n)]
	y = [params.sample() for _ in range(n - 1)]

	prod_x = 1
	for v in x:
		prod_x = (prod_x * v) % q
	prod_y = 1
	for v in y:
		prod_y = (prod_y * v) % q
	last = (prod_x * modinv(prod_y, q)) % q
	if not valid:
		last = (2 * last) % q
	y.append(last)
	return x, y, exps(x, params), exps(y, params)


def shuffle_instance(n, permuted=True, params=DEFAULT_PARAMS):
	"""Builds a simple k-shuffle instance with y a permutation of x * c / d.

	Returns (x, y, c, d, X, Y, C, D).
	"""
	q = params.q
	x = [params.sample() for _ in range(n)]
	c, d = params.sample(), params.sample()
	scale = (c * modinv(d, q)) % q
	y = [(x_i * scale) % q for x_i in x]
	if permuted:
		y = permute(y, generate_permutation(n))
	C, D = exps([c, d], params)
	return x, y, c, d, exps(x, params), exps(y, params), C, D
