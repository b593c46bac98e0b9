"""Address Resolution Protocol."""
import struct

from pktview import view
from pktview.view import LayerKind, PackError

ARP_HDR_LEN	= 28		# header length for ethernet/IPv4
ARP_FIX_LEN	= 8		# header length without addresses

# Hardware address format
ARP_HRD_ETH	= 0x0001		# ethernet hardware
ARP_HRD_IEEE802	= 0x0006		# IEEE 802 hardware

# Protocol address format
ARP_PRO_IP	= 0x0800		# IP protocol

# ARP operation
ARP_OP_REQUEST		= 1		# request to resolve ha given pa
ARP_OP_REPLY		= 2		# response giving hardware address
ARP_OP_REVREQUEST	= 3		# request to resolve pa given ha
ARP_OP_REVREPLY		= 4		# response giving protocol address


class ARP(view.View):
	"""
	Addresses follow the fixed header, their widths are given by hln and pln.
	Bytes following the addresses (e.g. ethernet padding) are kept as payload.
	"""
	__kind__ = LayerKind.ARP
	__hdr__ = (
		("hrd", "H", ARP_HRD_ETH),
		("pro", "H", ARP_PRO_IP),
		("hln", "B", 6),			# hardware address length
		("pln", "B", 4),			# protocol address length
		("op", "H", ARP_OP_REQUEST)
	)
	__hdr_extra__ = ("sha", "spa", "tha", "tpa")

	sha = b"\x00" * 6		# sender mac
	spa = b"\x00" * 4		# sender ip
	tha = b"\x00" * 6		# target mac
	tpa = b"\x00" * 4		# target ip

	# convenient access
	sha_s = view.get_property_mac("sha")
	spa_s = view.get_property_ip4("spa")
	tha_s = view.get_property_mac("tha")
	tpa_s = view.get_property_ip4("tpa")


def _addr_format(arp):
	return ">%ds%ds%ds%ds" % (arp.hln, arp.pln, arp.hln, arp.pln)


def decode(buf, parent=None):
	arp = ARP(parent=parent, frame=buf)

	if arp._unpack_header(buf) < ARP_FIX_LEN:
		arp.sha = arp.spa = arp.tha = arp.tpa = b""
		return arp

	off = ARP_FIX_LEN
	addrs = []

	for alen in (arp.hln, arp.pln, arp.hln, arp.pln):
		# clamped to the available bytes on truncated input
		addrs.append(buf[off: off + alen])
		off += alen
	arp.sha, arp.spa, arp.tha, arp.tpa = addrs
	arp.payload = buf[off:]
	return arp


def encode(arp, context=None):
	"""
	Return header + addresses + payload. Addresses are padded/cut to hln/pln bytes.
	"""
	try:
		addrs = struct.pack(_addr_format(arp), arp.sha, arp.spa, arp.tha, arp.tpa)
	except struct.error as e:
		raise PackError("could not pack ARP addresses: %s" % e)
	return arp._pack_header() + addrs + arp.payload


def strip(buf):
	return decode(buf).payload
