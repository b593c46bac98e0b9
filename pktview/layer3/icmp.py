"""Internet Control Message Protocol."""
from pktview import view, checksum
from pktview.view import LayerKind
from pktview.structcbs import pack_HH, unpack_HH

ICMP_HDR_LEN			= 8

# Types (icmp_type) and codes (icmp_code) -
# http://www.iana.org/assignments/icmp-parameters

ICMP_CODE_NONE			= 0	# for types without codes
ICMP_ECHOREPLY			= 0	# echo reply
ICMP_UNREACH			= 3	# dest unreachable, codes:
ICMP_UNREACH_NET		= 0	# bad net
ICMP_UNREACH_HOST		= 1	# bad host
ICMP_UNREACH_PROTO		= 2	# bad protocol
ICMP_UNREACH_PORT		= 3	# bad port
ICMP_UNREACH_NEEDFRAG		= 4	# IP_DF caused drop
ICMP_UNREACH_SRCFAIL		= 5	# src route failed
ICMP_UNREACH_NET_UNKNOWN	= 6	# unknown net
ICMP_UNREACH_HOST_UNKNOWN	= 7	# unknown host
ICMP_UNREACH_ISOLATED		= 8	# src host isolated
ICMP_UNREACH_NET_PROHIB		= 9	# for crypto devs
ICMP_UNREACH_HOST_PROHIB	= 10	# ditto
ICMP_UNREACH_TOSNET		= 11	# bad tos for net
ICMP_UNREACH_TOSHOST		= 12	# bad tos for host
ICMP_UNREACH_FILTER_PROHIB	= 13	# prohibited access
ICMP_UNREACH_HOST_PRECEDENCE	= 14	# precedence error
ICMP_UNREACH_PRECEDENCE_CUTOFF	= 15	# precedence cutoff
ICMP_SRCQUENCH			= 4	# packet lost, slow down
ICMP_REDIRECT			= 5	# shorter route, codes:
ICMP_REDIRECT_NET		= 0	# for network
ICMP_REDIRECT_HOST		= 1	# for host
ICMP_REDIRECT_TOSNET		= 2	# for tos and net
ICMP_REDIRECT_TOSHOST		= 3	# for tos and host
ICMP_ALTHOSTADDR		= 6	# alternate host address
ICMP_ECHO			= 8	# echo service
ICMP_RTRADVERT			= 9	# router advertise, codes:
ICMP_RTRADVERT_NORMAL		= 0	# normal
ICMP_RTRADVERT_NOROUTE_COMMON	= 16	# selective routing
ICMP_RTRSOLICIT			= 10	# router solicitation
ICMP_TIMEXCEED			= 11	# time exceeded, code:
ICMP_TIMEXCEED_INTRANS		= 0	# ttl==0 in transit
ICMP_TIMEXCEED_REASS		= 1	# ttl==0 in reass
ICMP_PARAMPROB			= 12	# ip header bad
ICMP_PARAMPROB_ERRATPTR		= 0	# req. opt. absent
ICMP_PARAMPROB_OPTABSENT	= 1	# req. opt. absent
ICMP_PARAMPROB_LENGTH		= 2	# bad length
ICMP_TSTAMP			= 13	# timestamp request
ICMP_TSTAMPREPLY		= 14	# timestamp reply
ICMP_INFO			= 15	# information request
ICMP_INFOREPLY			= 16	# information reply
ICMP_MASK			= 17	# address mask request
ICMP_MASKREPLY			= 18	# address mask reply
ICMP_TRACEROUTE			= 30	# traceroute
ICMP_TYPE_MAX			= 40


class ICMP(view.View):
	"""
	The 4 bytes following the checksum depend on the type. They are stored
	as id/seq (echo) and can be read as gw (redirect) or mtu (unreach/needfrag).
	"""
	__kind__ = LayerKind.ICMP
	__hdr__ = (
		("type", "B", ICMP_ECHO),
		("code", "B", 0),
		("cksum", "H", 0),
		("id", "H", 0),
		("seq", "H", 0)
	)

	def __get_gw(self):
		return pack_HH(self.id, self.seq)

	def __set_gw(self, value):
		self.id, self.seq = unpack_HH(value)
	gw = property(__get_gw, __set_gw)

	def __get_mtu(self):
		return self.seq

	def __set_mtu(self, value):
		self.seq = value
	mtu = property(__get_mtu, __set_mtu)

	gw_s = view.get_property_ip4("gw")


def decode(buf, parent=None):
	icmp = ICMP(parent=parent, frame=buf)
	hlen = icmp._unpack_header(buf)
	icmp.payload = buf[hlen:]
	return icmp


def encode(icmp, context=None):
	"""Update the checksum over header + payload and return both."""
	cksum = checksum.in_cksum(icmp._pack_header(cksum=0) + icmp.payload)
	hdr = icmp._pack_header(cksum=cksum)
	icmp.cksum = cksum
	return hdr + icmp.payload


def strip(buf):
	return decode(buf).payload
