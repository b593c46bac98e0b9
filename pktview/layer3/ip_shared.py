"""
Values shared between IP and the layers carried by it: protocol numbers
and the pseudo-header used for transport layer checksums.
"""
import logging
import struct

from pktview.view import MissingContextError, PackError
from pktview.structcbs import pack_ipv4_header, pack_ipv6_header

logger = logging.getLogger("pktview")

# Protocol (ip_p) - http://www.iana.org/assignments/protocol-numbers
IP_PROTO_IP		= 0		# dummy for IP
IP_PROTO_HOPOPTS	= IP_PROTO_IP	# IPv6 hop-by-hop options
IP_PROTO_ICMP		= 1		# ICMP
IP_PROTO_IGMP		= 2		# IGMP
IP_PROTO_GGP		= 3		# gateway-gateway protocol
IP_PROTO_IPIP		= 4		# IP in IP
IP_PROTO_ST		= 5		# ST datagram mode
IP_PROTO_TCP		= 6		# TCP
IP_PROTO_CBT		= 7		# CBT
IP_PROTO_EGP		= 8		# exterior gateway protocol
IP_PROTO_IGP		= 9		# interior gateway protocol
IP_PROTO_UDP		= 17		# UDP
IP_PROTO_IP6		= 41		# IPv6
IP_PROTO_RSVP		= 46		# resource reservation
IP_PROTO_GRE		= 47		# General Routing Encap.
IP_PROTO_ESP		= 50		# Encap Security Payload
IP_PROTO_AH		= 51		# Authentication Header
IP_PROTO_ICMP6		= 58		# ICMP for IPv6
IP_PROTO_OSPF		= 89		# Open Shortest Path First
IP_PROTO_PIM		= 103		# Protocol Independent Multicast
IP_PROTO_VRRP		= 112		# Virtual Router Redundancy Protocol
IP_PROTO_SCTP		= 132		# Stream Control Transmission Protocol
IP_PROTO_RAW		= 255		# Raw IP packets

# upper layer length field of the pseudo-header is 16 bit
IP_SEGMENT_LEN_MAX	= 65535


def pseudo_header(segment, context, proto, seglen):
	"""
	Build the IP pseudo-header needed for UDP/TCP checksums.

	segment -- the transport view, its parent is used if context is None
	context -- enclosing network layer (IP view, pktview.view.Context, ...) providing src/dst
	proto -- IP protocol number of the transport layer
	seglen -- transport header + payload length
	return -- pseudo-header bytes
	raises -- MissingContextError if no src/dst addresses are available,
		PackError if seglen doesn't fit into the pseudo-header
	"""
	if context is None:
		context = segment.parent

	if context is None:
		raise MissingContextError("%s needs an enclosing IP layer to calculate its checksum" %
			segment.__class__.__name__)
	try:
		src, dst = context.src, context.dst
	except AttributeError:
		raise MissingContextError("context %r has no src/dst addresses" % context.__class__.__name__)

	if seglen > IP_SEGMENT_LEN_MAX:
		logger.warning("%s too long for the pseudo-header: %d bytes", segment.__class__.__name__, seglen)
		raise PackError("%s length exceeds %d bytes: %d" % (segment.__class__.__name__, IP_SEGMENT_LEN_MAX, seglen))

	try:
		if len(src) == 4 and len(dst) == 4:
			return pack_ipv4_header(src, dst, proto, seglen)
		elif len(src) == 16 and len(dst) == 16:
			# same sum as the RFC 2460 layout (32 bit length, 24 bit zero padding)
			return pack_ipv6_header(src, dst, proto, seglen)
	except struct.error as e:
		logger.warning("could not pack pseudo-header: %r", e)
		raise PackError("could not pack pseudo-header: %s" % e)
	raise MissingContextError("invalid address length in context: src=%d, dst=%d bytes" % (len(src), len(dst)))
