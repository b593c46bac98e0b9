"""Internet Group Management Protocol."""

from pktview import view, checksum
from pktview.view import LayerKind

IGMP_HDR_LEN		= 8

IGMP_MEMBERSHIP_QUERY	= 0x11
IGMP_V1_MEMBERSHIP_REPORT	= 0x12
IGMP_V2_MEMBERSHIP_REPORT	= 0x16
IGMP_V2_LEAVE_GROUP	= 0x17
IGMP_V3_MEMBERSHIP_REPORT	= 0x22


class IGMP(view.View):
	__kind__ = LayerKind.IGMP
	__hdr__ = (
		("type", "B", IGMP_MEMBERSHIP_QUERY),
		("maxresp", "B", 0),
		("cksum", "H", 0),
		("group", "4s", b"\x00" * 4)
	)

	# Convenient access for: group[_s]
	group_s = view.get_property_ip4("group")


def decode(buf, parent=None):
	igmp = IGMP(parent=parent, frame=buf)
	hlen = igmp._unpack_header(buf)
	igmp.payload = buf[hlen:]
	return igmp


def encode(igmp, context=None):
	cksum = checksum.in_cksum(igmp._pack_header(cksum=0) + igmp.payload)
	hdr = igmp._pack_header(cksum=cksum)
	igmp.cksum = cksum
	return hdr + igmp.payload


def strip(buf):
	return decode(buf).payload
