"""Ordered, reliable duplex message channels for the two-party proofs.

A protocol message is a list of integers. The absent message (None) is the
abort signal; a closed channel reads as None as well.
"""

import queue
import socket
import threading
from contextlib import contextmanager

from errors import PeerAborted, MalformedMessage
from util import send, recv


_CLOSED = object()


class Channel:
	"""One end of a duplex channel."""

	def __init__(self):
		self.aborted = False

	def send(self, msg):
		raise NotImplementedError

	def recv(self):
		"""Blocks until the next message arrives. Returns None once closed."""
		raise NotImplementedError

	def close(self):
		raise NotImplementedError

	def abort(self):
		"""Signals a fatal error to the peer by sending the absent message."""
		if self.aborted:
			return
		self.aborted = True
		try:
			self.send(None)
		except (OSError, PeerAborted):
			# peer already gone, nothing left to signal
			pass

	def expect(self, step, length=None):
		"""Receives a list of integers.

		step: Protocol step name, used in error messages
		length: Required number of elements, if any

		Raises PeerAborted if the message is absent and MalformedMessage if it
		is not a list of integers of the required length.
		"""
		msg = self.recv()
		if msg is None:
			raise PeerAborted('channel closed by peer ({})'.format(step))
		if not isinstance(msg, list) or not all(
				isinstance(v, int) and not isinstance(v, bool) for v in msg):
			raise MalformedMessage('malformed {}'.format(step))
		if length is not None and len(msg) != length:
			raise MalformedMessage('malformed {}: expected {} elements, got {}'.format(
					step, length, len(msg)))
		return msg

	@contextmanager
	def guard(self):
		"""Aborts the channel if the body fails on this side."""
		try:
			yield self
		except PeerAborted:
			raise
		except Exception:
			self.abort()
			raise

	def __enter__(self):
		return self

	def __exit__(self, *exc):
		self.close()


class LocalChannel(Channel):
	"""In-process channel end backed by a pair of queues."""

	def __init__(self, inbox, outbox):
		super().__init__()
		self._inbox = inbox
		self._outbox = outbox
		self._closed = threading.Event()

	@classmethod
	def pair(cls):
		"""Returns two connected channel ends."""
		a, b = queue.Queue(), queue.Queue()
		return cls(a, b), cls(b, a)

	def send(self, msg):
		if self._closed.is_set():
			raise OSError('channel is closed')
		# copy so that neither side aliases the other's values
		self._outbox.put(None if msg is None else list(msg))

	def recv(self):
		if self._closed.is_set():
			return None
		msg = self._inbox.get()
		if msg is _CLOSED:
			self._closed.set()
			return None
		return msg

	def close(self):
		if not self._closed.is_set():
			self._closed.set()
			self._outbox.put(_CLOSED)
			# wake a reader blocked on this end
			self._inbox.put(_CLOSED)


class SocketChannel(Channel):
	"""Channel end over a connected stream socket.

	Messages are JSON framed by an 8-byte big-endian length prefix.
	"""

	def __init__(self, sock):
		super().__init__()
		self.sock = sock

	@classmethod
	def pair(cls):
		a, b = socket.socketpair()
		return cls(a), cls(b)

	@classmethod
	def connect(cls, addr):
		return cls(socket.create_connection(addr))

	def send(self, msg):
		try:
			send(self.sock, msg)
		except OSError as err:
			raise PeerAborted('channel closed by peer ({})'.format(err)) from err

	def recv(self):
		try:
			return recv(self.sock)
		except OSError:
			return None
		except ValueError as err:
			# not UTF-8 or not JSON
			raise MalformedMessage('malformed frame: {}'.format(err)) from err

	def close(self):
		try:
			self.sock.shutdown(socket.SHUT_RDWR)
		except OSError:
			pass
		self.sock.close()
