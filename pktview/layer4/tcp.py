"""
Transmission Control Protocol (TCP)

RFC 793 - TCP v4
RFC 1122 - includes some error corrections for TCP
RFC 1323 - TCP-Extensions
RFC 2018 - TCP Selective Acknowledgment Options
RFC 3168 - The Addition of Explicit Congestion Notification (ECN) to IP
"""
import logging

from pktview import view, checksum
from pktview.view import LayerKind, PackError
from pktview.layer3.ip_shared import IP_PROTO_TCP, pseudo_header

logger = logging.getLogger("pktview")

# avoid references for performance reasons
in_cksum = checksum.in_cksum

TCP_HDR_LEN	= 20		# header length without options
TCP_HDR_LEN_MAX	= 60

# TCP control flags
TH_FIN		= 0x01		# end of data
TH_SYN		= 0x02		# synchronize sequence numbers
TH_RST		= 0x04		# reset connection
TH_PUSH		= 0x08		# push
TH_ACK		= 0x10		# acknowledgment number set
TH_URG		= 0x20		# urgent pointer set
TH_ECE		= 0x40		# ECN echo, RFC 3168
TH_CWR		= 0x80		# congestion window reduced

TCP_PORT_MAX	= 65535		# maximum port
TCP_WIN_MAX	= 65535		# maximum (unscaled) window

# TCP Options (opt_type) - http://www.iana.org/assignments/tcp-parameters
TCP_OPT_EOL		= 0		# end of option list
TCP_OPT_NOP		= 1		# no operation
TCP_OPT_MSS		= 2		# maximum segment size
TCP_OPT_WSCALE		= 3		# window scale factor, RFC 1072
TCP_OPT_SACKOK		= 4		# SACK permitted, RFC 2018
TCP_OPT_SACK		= 5		# SACK, RFC 2018
TCP_OPT_ECHO		= 6		# echo (obsolete), RFC 1072
TCP_OPT_ECHOREPLY	= 7		# echo reply (obsolete), RFC 1072
TCP_OPT_TIMESTAMP	= 8		# timestamp, RFC 1323
TCP_OPT_POCONN		= 9		# partial order conn, RFC 1693
TCP_OPT_POSVC		= 10		# partial order service, RFC 1693
TCP_OPT_CC		= 11		# connection count, RFC 1644
TCP_OPT_CCNEW		= 12		# CC.NEW, RFC 1644
TCP_OPT_CCECHO		= 13		# CC.ECHO, RFC 1644
TCP_OPT_ALTSUM		= 14		# alt checksum request, RFC 1146
TCP_OPT_ALTSUMDATA	= 15		# alt checksum data, RFC 1146
TCP_OPT_MD5		= 19		# MD5 signature, RFC 2385
TCP_OPT_MAX		= 27

TCP_OPT_SINGLE = {TCP_OPT_EOL, TCP_OPT_NOP}


class TCP(view.View):
	__kind__ = LayerKind.TCP
	__hdr__ = (
		("sport", "H", 0xdead),
		("dport", "H", 0),
		("seq", "I", 0xdeadbeef),
		("ack", "I", 0),
		("off_x2", "B", ((5 << 4) | 0)),  # 10*4 Byte
		("flags", "B", TH_SYN),  # acces via (obj.flags & TH_XYZ)
		("win", "H", TCP_WIN_MAX),
		("cksum", "H", 0),
		("urp", "H", 0)
	)
	__hdr_extra__ = ("opts",)

	# raw option bytes between the fixed header and the payload
	opts = b""

	# 4 bits | 4 bits
	# offset | reserved
	# offset * 4 = header length
	def __get_off(self):
		return self.off_x2 >> 4

	def __set_off(self, value):
		self.off_x2 = (value << 4) | (self.off_x2 & 0xf)
	off = property(__get_off, __set_off)

	# return real header length based on header info
	def __get_hlen(self):
		return self.off * 4

	# set real header length based on header info (should be n*4)
	def __set_hlen(self, value):
		self.off = int(value / 4)
	hlen = property(__get_hlen, __set_hlen)


def decode(buf, parent=None):
	"""
	Decode a TCP header. The data offset is read first to separate options and
	payload. Offsets below 5 are treated as "no options".
	"""
	tcp = TCP(parent=parent, frame=buf)

	if tcp._unpack_header(buf) < TCP_HDR_LEN:
		return tcp

	hlen = tcp.hlen

	if hlen < TCP_HDR_LEN:
		logger.debug("invalid TCP header length: %d", hlen)
		hlen = TCP_HDR_LEN
	tcp.opts = buf[TCP_HDR_LEN: hlen]
	tcp.payload = buf[TCP_HDR_LEN + len(tcp.opts):]
	return tcp


def calc_sum(tcp, context=None, opts=None, off_x2=None):
	"""
	Calculate the TCP-checksum using the IP pseudo-header of context
	(or tcp.parent if context is None).

	opts, off_x2 -- options and data offset to be used instead of the ones of tcp
	return -- checksum
	raises -- MissingContextError if no enclosing IP addresses are available
	"""
	if opts is None:
		opts = tcp.opts
	if off_x2 is None:
		off_x2 = tcp.off_x2
	tcp_bin = tcp._pack_header(off_x2=off_x2, cksum=0) + opts + tcp.payload
	pseudo = pseudo_header(tcp, context, IP_PROTO_TCP, len(tcp_bin))
	return in_cksum(pseudo + tcp_bin)


def encode(tcp, context=None):
	"""
	Update data offset and checksum and return the TCP segment. The view is only
	updated if packing succeeds.

	context -- enclosing IP layer (or anything having src/dst), defaults to tcp.parent
	"""
	opts = view.pad_opts(tcp.opts)
	hlen = TCP_HDR_LEN + len(opts)

	if hlen > TCP_HDR_LEN_MAX:
		raise PackError("TCP options too long: %d bytes" % len(opts))
	off_x2 = ((hlen >> 2) << 4) | (tcp.off_x2 & 0xf)
	cksum = calc_sum(tcp, context, opts, off_x2)
	hdr = tcp._pack_header(off_x2=off_x2, cksum=cksum)
	tcp.opts, tcp.off_x2, tcp.cksum = opts, off_x2, cksum
	return hdr + opts + tcp.payload


def strip(buf):
	"""Return the payload of the TCP segment in buf."""
	return decode(buf).payload


def parse_opts(opts):
	"""Parse TCP option bytes and return them as list of (type, data) tuples."""
	return view.parse_opts(opts, TCP_OPT_SINGLE)
