"""
Ethernet II, IEEE 802.3 (with 802.2 LLC and SNAP), IEEE 802.1Q

RFC 894 - Ethernet II
RFC 1042 - IP over IEEE 802 networks (LLC/SNAP)
"""
import logging
import struct

from pktview import view
from pktview.view import LayerKind, PackError
from pktview.structcbs import unpack_H, pack_H, pack_HH, pack_BBB, pack_mac_pair, pack_snap

logger = logging.getLogger("pktview")

ETH_CRC_LEN	= 4
ETH_HDR_LEN	= 14
ETH_ADDR_LEN	= 6
ETH_VLAN_LEN	= 4

ETH_LEN_MIN	= 64		# minimum frame length with CRC
ETH_LEN_MAX	= 1518		# maximum frame length with CRC

ETH_MTU		= (ETH_LEN_MAX - ETH_HDR_LEN - ETH_CRC_LEN)
ETH_MIN		= (ETH_LEN_MIN - ETH_HDR_LEN - ETH_CRC_LEN)

# type/length field: values up to this one are 802.3 lengths
ETH_8023_LEN_MAX	= 1500

# Ethernet payload types - http://standards.ieee.org/regauth/ethertype
ETH_TYPE_LLC		= 0x0004		# raw 802.2 frame without SNAP (pseudo type, Linux ETH_P_802_2)
ETH_TYPE_PUP		= 0x0200		# PUP protocol
ETH_TYPE_IP		= 0x0800		# IPv4 protocol
ETH_TYPE_ARP		= 0x0806		# address resolution protocol
ETH_TYPE_WOL		= 0x0842		# Wake on LAN
ETH_TYPE_CDP		= 0x2000		# Cisco Discovery Protocol
ETH_TYPE_DTP		= 0x2004		# Cisco Dynamic Trunking Protocol
ETH_TYPE_REVARP		= 0x8035		# reverse addr resolution protocol
ETH_TYPE_ETHTALK	= 0x809B		# Apple Talk
ETH_TYPE_AARP		= 0x80F3		# Appletalk Address Resolution Protocol
ETH_TYPE_8021Q		= 0x8100		# IEEE 802.1Q VLAN tagging
ETH_TYPE_IPX		= 0x8137		# Internetwork Packet Exchange
ETH_TYPE_IP6		= 0x86DD		# IPv6 protocol
ETH_TYPE_MPLS_UCAST	= 0x8847		# MPLS unicast
ETH_TYPE_MPLS_MCAST	= 0x8848		# MPLS multicast
ETH_TYPE_PPOE_DISC	= 0x8863		# PPPoE Discovery
ETH_TYPE_PPOE_SESS	= 0x8864		# PPPoE Session
ETH_TYPE_LLDP		= 0x88CC		# Link Layer Discovery Protocol
ETH_TYPE_EFC		= 0x8808		# Ethernet flow control
ETH_TYPE_SP		= 0x8809		# Slow Protocols

# 802.2 LLC
LLC_HDR_LEN	= 3
LLC_SAP_SNAP	= 0xAA
LLC_CTRL_UI	= 0x03
SNAP_HDR_LEN	= 5

# framing found on decode, reproduced on encode
ETH_FRAMING_II		= 0		# Ethernet II: type field
ETH_FRAMING_8022	= 1		# 802.3 length + 802.2 LLC
ETH_FRAMING_SNAP	= 2		# 802.3 length + 802.2 LLC + SNAP


class Ethernet(view.View):
	"""
	type is the EtherType of the payload for every framing: for 802.3 frames it's
	taken from the SNAP header or set to ETH_TYPE_LLC. The 802.3 length field is
	stored in len.
	"""
	__kind__ = LayerKind.ETHERNET
	__hdr__ = (
		("dst", "6s", b"\xff" * 6),
		("src", "6s", b"\xff" * 6),
		("type", "H", ETH_TYPE_IP)
	)
	__hdr_extra__ = ("framing", "vlan", "len", "dsap", "ssap", "ctrl", "oui", "padding")

	framing = ETH_FRAMING_II
	# 802.1Q tag control information PCP(3 bits),CFI(1 bit), VID(12 bits), None = untagged
	vlan = None
	# 802.3 length, 802.2 LLC and SNAP fields
	len = 0
	dsap = 0
	ssap = 0
	ctrl = 0
	oui = b"\x00" * 3
	# bytes after the length given by 802.3 length
	padding = b""

	dst_s = view.get_property_mac("dst")
	src_s = view.get_property_mac("src")

	# None on untagged frames, setting a value adds a tag
	def __get_prio(self):
		if self.vlan is None:
			return None
		return (self.vlan & 0xE000) >> 13

	def __set_prio(self, value):
		self.vlan = ((self.vlan or 0) & ~0xE000) | (value << 13)
	prio = property(__get_prio, __set_prio)

	def __get_cfi(self):
		if self.vlan is None:
			return None
		return (self.vlan & 0x1000) >> 12

	def __set_cfi(self, value):
		self.vlan = ((self.vlan or 0) & ~0x1000) | (value << 12)
	cfi = property(__get_cfi, __set_cfi)

	def __get_vid(self):
		if self.vlan is None:
			return None
		return self.vlan & 0x0FFF

	def __set_vid(self, value):
		self.vlan = ((self.vlan or 0) & 0xF000) | value
	vid = property(__get_vid, __set_vid)


def _decode_llc(eth, buf, hlen):
	"""
	Dissect 802.2 LLC (+ SNAP) following an 802.3 length field at buf[hlen - 2: hlen].
	"""
	eth.framing = ETH_FRAMING_8022
	eth.len = eth.type
	eth.type = ETH_TYPE_LLC
	llc = buf[hlen: hlen + LLC_HDR_LEN]

	if len(llc) < LLC_HDR_LEN:
		logger.debug("truncated LLC header: %d bytes", len(llc))
		return
	eth.dsap, eth.ssap, eth.ctrl = llc
	data_start = hlen + LLC_HDR_LEN

	if eth.dsap == LLC_SAP_SNAP and eth.ssap == LLC_SAP_SNAP:
		eth.framing = ETH_FRAMING_SNAP
		snap = buf[data_start: data_start + SNAP_HDR_LEN]

		if len(snap) < SNAP_HDR_LEN:
			logger.debug("truncated SNAP header: %d bytes", len(snap))
			eth.oui = snap[:3]
			eth.type = 0
			return
		eth.oui = snap[:3]
		eth.type = unpack_H(snap[3:5])[0]
		data_start += SNAP_HDR_LEN
	eth.payload = view.declared_payload(buf, data_start, hlen + eth.len)
	eth.padding = buf[data_start + len(eth.payload):]


def decode(buf, parent=None):
	"""
	Decode an ethernet frame. The type/length field decides about the framing:
	> 1500 = Ethernet II type, <= 1500 = 802.3 length followed by 802.2 LLC.
	"""
	eth = Ethernet(parent=parent, frame=buf)
	hlen = eth._unpack_header(buf)

	if hlen < ETH_HDR_LEN:
		return eth

	# single 802.1Q tag: type field is actually a vlan tag
	if eth.type == ETH_TYPE_8021Q and len(buf) >= ETH_HDR_LEN + ETH_VLAN_LEN:
		eth.vlan = unpack_H(buf[14:16])[0]
		# get real type/length
		eth.type = unpack_H(buf[16:18])[0]
		hlen += ETH_VLAN_LEN

	if eth.type > ETH_8023_LEN_MAX:
		eth.payload = buf[hlen:]
	else:
		_decode_llc(eth, buf, hlen)
	return eth


def encode(eth, context=None):
	"""
	Return the frame using the framing found on decode (Ethernet II by default).
	The 802.3 length is updated from the current payload.
	"""
	try:
		hdr = [pack_mac_pair(eth.dst, eth.src)]

		if eth.vlan is not None:
			hdr.append(pack_HH(ETH_TYPE_8021Q, eth.vlan))

		if eth.framing == ETH_FRAMING_II:
			hdr.append(pack_H(eth.type))
			return b"".join(hdr) + eth.payload

		llc = pack_BBB(eth.dsap, eth.ssap, eth.ctrl)

		if eth.framing == ETH_FRAMING_SNAP:
			llc += pack_snap(eth.oui, eth.type)
		length = len(llc) + len(eth.payload)
		hdr.append(pack_H(length))
	except struct.error as e:
		logger.warning("could not pack ethernet header: %r", e)
		raise PackError("could not pack ethernet header: %s" % e)
	eth.len = length
	return b"".join(hdr) + llc + eth.payload + eth.padding


def strip(buf):
	"""Return the payload of the ethernet frame in buf."""
	return decode(buf).payload
