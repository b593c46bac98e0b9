"""
Internet Protocol version 4.

RFC 791
"""
import logging

from pktview import view, checksum
from pktview.view import LayerKind, PackError
from pktview.layer3.ip_shared import IP_PROTO_IP, IP_PROTO_ICMP, IP_PROTO_IGMP, IP_PROTO_IPIP, IP_PROTO_TCP,\
	IP_PROTO_UDP, IP_PROTO_IP6, IP_PROTO_GRE, IP_PROTO_ESP, IP_PROTO_AH, IP_PROTO_OSPF, IP_PROTO_PIM,\
	IP_PROTO_SCTP, IP_PROTO_RAW

logger = logging.getLogger("pktview")

# avoid references for performance reasons
in_cksum = checksum.in_cksum

IP_HDR_LEN	= 20		# header length without options
IP_HDR_LEN_MAX	= 60		# 15 * 4 bytes
IP_ADDR_LEN	= 4
IP_LEN_MAX	= 65535

# IP options
# http://www.iana.org/assignments/ip-parameters/ip-parameters.xml
IP_OPT_EOOL			= 0
IP_OPT_NOP			= 1
IP_OPT_SEC			= 2
IP_OPT_LSR			= 3
IP_OPT_TS			= 4
IP_OPT_ESEC			= 5
IP_OPT_CIPSO			= 6
IP_OPT_RR			= 7
IP_OPT_SID			= 8
IP_OPT_SSR			= 9
IP_OPT_MTUP			= 11
IP_OPT_MTUR			= 12
IP_OPT_TR			= 18
IP_OPT_RTRALT			= 20
IP_OPT_QS			= 25

IP_OPT_SINGLE = {IP_OPT_EOOL, IP_OPT_NOP}


class IP(view.View):
	__kind__ = LayerKind.IP
	__hdr__ = (
		("v_hl", "B", 69),		# = 0x45
		("tos", "B", 0),
		("len", "H", 20),
		("id", "H", 0),
		("off", "H", 0),
		("ttl", "B", 64),
		("p", "B", IP_PROTO_TCP),
		("cksum", "H", 0),
		("src", "4s", b"\x00" * 4),
		("dst", "4s", b"\x00" * 4)
	)
	__hdr_extra__ = ("opts",)

	# raw option bytes between the fixed header and the payload
	opts = b""

	def __get_v(self):
		return self.v_hl >> 4

	def __set_v(self, value):
		self.v_hl = (value << 4) | (self.v_hl & 0xf)
	v = property(__get_v, __set_v)

	def __get_hl(self):
		return self.v_hl & 0x0f

	def __set_hl(self, value):
		self.v_hl = (self.v_hl & 0xf0) | value
	hl = property(__get_hl, __set_hl)

	def __get_flags(self):
		return (self.off & 0xE000) >> 13

	def __set_flags(self, value):
		self.off = (self.off & ~0xE000) | (value << 13)
	flags = property(__get_flags, __set_flags)

	def __get_offset(self):
		return self.off & IP_OFFMASK

	def __set_offset(self, value):
		self.off = (self.off & 0xE000) | value
	offset = property(__get_offset, __set_offset)

	# Convenient access for: src[_s], dst[_s]
	src_s = view.get_property_ip4("src")
	dst_s = view.get_property_ip4("dst")


def decode(buf, parent=None):
	"""
	Decode an IPv4 header and its payload. Header length is read first to separate
	options and payload. Invalid header lengths are clamped, never rejected.
	"""
	ip = IP(parent=parent, frame=buf)

	if ip._unpack_header(buf) < IP_HDR_LEN:
		return ip

	total_header_length = ip.hl << 2

	if total_header_length < IP_HDR_LEN:
		# invalid header length: assume no options at all
		logger.debug("invalid IP header length: %d", total_header_length)
		total_header_length = IP_HDR_LEN
	# slicing clamps options to the available bytes
	ip.opts = buf[IP_HDR_LEN: total_header_length]
	ip.payload = view.declared_payload(buf, IP_HDR_LEN + len(ip.opts), ip.len)
	return ip


def encode(ip, context=None):
	"""
	Update header length, total length and checksum and return header + payload.
	The view is only updated if packing succeeds.

	context -- unused: the IP checksum only covers the IP header
	"""
	opts = view.pad_opts(ip.opts)
	hlen = IP_HDR_LEN + len(opts)

	if hlen > IP_HDR_LEN_MAX:
		raise PackError("IP options too long: %d bytes" % len(opts))
	v_hl = (ip.v_hl & 0xf0) | (hlen >> 2)
	total_len = hlen + len(ip.payload)
	cksum = in_cksum(ip._pack_header(v_hl=v_hl, len=total_len, cksum=0) + opts)
	hdr = ip._pack_header(v_hl=v_hl, len=total_len, cksum=cksum)
	ip.opts, ip.v_hl, ip.len, ip.cksum = opts, v_hl, total_len, cksum
	return hdr + opts + ip.payload


def strip(buf):
	"""Return the payload of the IP packet in buf."""
	return decode(buf).payload


def parse_opts(opts):
	"""Parse IP option bytes and return them as list of (type, data) tuples."""
	return view.parse_opts(opts, IP_OPT_SINGLE)


# Type of service (ip_tos), RFC 1349 ("obsoleted by RFC 2474")
IP_TOS_DEFAULT			= 0x00			# default
IP_TOS_LOWDELAY			= 0x10			# low delay
IP_TOS_THROUGHPUT		= 0x08			# high throughput
IP_TOS_RELIABILITY		= 0x04			# high reliability
IP_TOS_LOWCOST			= 0x02			# low monetary cost - XXX
IP_TOS_ECT			= 0x02			# ECN-capable transport
IP_TOS_CE			= 0x01			# congestion experienced

# Fragmentation flags (ip_off)
IP_RF				= 0x8000		# reserved
IP_DF				= 0x4000		# don't fragment
IP_MF				= 0x2000		# more fragments (not last frag)
IP_OFFMASK			= 0x1fff		# mask for fragment offset

# Time-to-live (ip_ttl), seconds
IP_TTL_DEFAULT			= 64			# default ttl, RFC 1122, RFC 1340
IP_TTL_MAX			= 255			# maximum ttl
