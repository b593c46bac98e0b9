"""
Internet checksum (RFC 1071) and byte order helpers.
"""
import array
import socket

# host <-> network byte order for 16 bit values, no-op on big endian hosts
host_to_network16 = socket.htons
network_to_host16 = socket.ntohs


def in_cksum_add(s, buf):
	"""
	Add all 16 bit words of buf to the running sum s.
	A trailing odd byte is padded with a zero byte, so only the last buffer
	of a sequence of in_cksum_add() calls may have an odd length.

	s -- running sum
	buf -- bytes to be added
	return -- the new (unfolded) sum
	"""
	if len(buf) % 2 != 0:
		buf = buf + b"\x00"
	# words are summed in host order, in_cksum_done() converts the result
	return s + sum(array.array("H", buf))


def in_cksum_done(s):
	"""
	Fold carries into the low 16 bits and return the one's complement.

	return -- checksum as host-native int, to be packed big endian
	"""
	while s >> 16:
		s = (s >> 16) + (s & 0xFFFF)
	return network_to_host16(~s & 0xFFFF)


def in_cksum(buf):
	"""Return the Internet checksum of buf."""
	return in_cksum_done(in_cksum_add(0, buf))
