"""
User Datagram Protocol (UDP)

RFC 768 - User Datagram Protocol
RFC 2460 - Internet Protocol, Version 6 (IPv6) Specification
"""
from pktview import view, checksum
from pktview.view import LayerKind
from pktview.layer3.ip_shared import IP_PROTO_UDP, pseudo_header

UDP_HDR_LEN	= 8
UDP_PORT_MAX	= 65535

UDP_PROTO_DNS		= 53
UDP_PROTO_DHCP		= (67, 68)
UDP_PROTO_TFTP		= 69
UDP_PROTO_NTP		= 123


class UDP(view.View):
	__kind__ = LayerKind.UDP
	__hdr__ = (
		("sport", "H", 0xdead),
		("dport", "H", 0),
		("len", "H", 8),
		("cksum", "H", 0)
	)


def decode(buf, parent=None):
	"""
	Decode a UDP header. The payload is limited by the length field if it fits
	into buf. The checksum is taken as is.
	"""
	udp = UDP(parent=parent, frame=buf)

	if udp._unpack_header(buf) < UDP_HDR_LEN:
		return udp
	udp.payload = view.declared_payload(buf, UDP_HDR_LEN, udp.len)
	return udp


def calc_sum(udp, context=None, length=None):
	"""
	Calculate the UDP-checksum using the IP pseudo-header of context
	(or udp.parent if context is None).

	length -- UDP length to be used instead of udp.len
	return -- checksum
	raises -- MissingContextError if no enclosing IP addresses are available
	"""
	if length is None:
		length = udp.len
	pseudo = pseudo_header(udp, context, IP_PROTO_UDP, length)
	udp_bin = udp._pack_header(len=length, cksum=0) + udp.payload
	csum = checksum.in_cksum(pseudo + udp_bin)

	if csum == 0:
		csum = 0xffff    # RFC 768, p2
	return csum


def encode(udp, context=None):
	"""
	Set length and checksum and return the UDP datagram. The view is only
	updated if packing succeeds.

	context -- enclosing IP layer (or anything having src/dst), defaults to udp.parent
	"""
	length = UDP_HDR_LEN + len(udp.payload)
	cksum = calc_sum(udp, context, length)
	hdr = udp._pack_header(len=length, cksum=cksum)
	udp.len, udp.cksum = length, cksum
	return hdr + udp.payload


def strip(buf):
	"""Return the payload of the UDP datagram in buf."""
	return decode(buf).payload
