import socket
import sys
from threading import Thread

import config
import shuffle
from channel import SocketChannel
from elgamal import generate_keys, encrypt_message
from errors import MixError
from group import DEFAULT_PARAMS
from mix import generate_permutation, mix, permute
from util import Constants, modinv, sprint, eprint


def run_mix(n, params=DEFAULT_PARAMS):
	"""Encrypts n messages, mixes them and prints the plaintexts."""
	pk, sk = generate_keys(params)
	R, C = [], []
	for i in range(n):
		R_i, C_i = encrypt_message(pk, str(i + 1).encode(Constants.ENCODING))
		R.append(R_i)
		C.append(C_i)

	pi = generate_permutation(n)
	sprint(Constants.MIX, 'permutation: {}'.format(pi))
	for i, M in enumerate(mix(sk, R, C, pi)):
		sprint(Constants.MIX, '{}: {}'.format(i, params.decode(M).decode(Constants.ENCODING)))


def _prove(addr, x, y, c, d, params):
	try:
		with SocketChannel.connect(addr) as chan:
			shuffle.prove(chan, x, y, c, d, params)
		sprint(Constants.PROVER, 'Proof sent.')
	except MixError as err:
		eprint(Constants.PROVER, 'Proof aborted: {}'.format(err))


def run_proof(n, addr=config.MIX_ADDR, params=DEFAULT_PARAMS):
	"""Runs a simple k-shuffle proof over TCP and returns whether it verified."""
	g, q = params.g, params.q

	# y is a permutation of x, scaled by c/d
	x = [params.sample() for _ in range(n)]
	c, d = params.sample(), params.sample()
	scale = (c * modinv(d, q)) % q
	y = permute([(x_i * scale) % q for x_i in x], generate_permutation(n))
	X = [params.powm(g, x_i) for x_i in x]
	Y = [params.powm(g, y_i) for y_i in y]
	C, D = params.powm(g, c), params.powm(g, d)

	ss = socket.socket()
	ss.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
	ss.bind(addr)
	ss.listen(1)
	try:
		prover = Thread(target=_prove, args=(addr, x, y, c, d, params), daemon=True)
		prover.start()
		s, _ = ss.accept()
		with SocketChannel(s) as chan:
			ok = shuffle.verify(chan, X, Y, C, D, params)
		prover.join()
	finally:
		ss.close()

	if ok:
		sprint(Constants.VERIFIER, 'Verifiable shuffle accepted.')
	else:
		eprint(Constants.VERIFIER, 'Verifiable shuffle failed.')
	return ok


def main():
	if len(sys.argv) > 2 or (len(sys.argv) == 2 and not sys.argv[1].isdigit()):
		print('USAGE: python main.py [n]')
		sys.exit(1)

	n = int(sys.argv[1]) if len(sys.argv) == 2 else 10
	try:
		run_mix(n)
		if n > 0 and not run_proof(n):
			sys.exit(1)
	except MixError as err:
		eprint(Constants.MIX, err)
		sys.exit(1)

if __name__ == '__main__':
	main()
