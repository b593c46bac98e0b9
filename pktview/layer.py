"""
Kind based access to the protocol modules and helpers to chain layers.

Every protocol module offers decode(buf, parent), encode(view, context) and
strip(buf). The functions here select the module by LayerKind. The lookup
tables map type/protocol fields to the kind of the next layer, decode_all()
and encode_all() use them to walk a whole frame.
"""
import logging

from pktview.view import LayerKind
from pktview.layer12 import arp, ethernet
from pktview.layer3 import icmp, igmp, ip
from pktview.layer4 import tcp, udp

logger = logging.getLogger("pktview")

_CODECS = {
	LayerKind.ETHERNET: ethernet,
	LayerKind.ARP: arp,
	LayerKind.IP: ip,
	LayerKind.ICMP: icmp,
	LayerKind.IGMP: igmp,
	LayerKind.UDP: udp,
	LayerKind.TCP: tcp
}

# EtherType -> kind
ETH_TYPE_KINDS = {
	ethernet.ETH_TYPE_IP: LayerKind.IP,
	ethernet.ETH_TYPE_ARP: LayerKind.ARP
}

# IP protocol number -> kind
IP_PROTO_KINDS = {
	ip.IP_PROTO_ICMP: LayerKind.ICMP,
	ip.IP_PROTO_IGMP: LayerKind.IGMP,
	ip.IP_PROTO_TCP: LayerKind.TCP,
	ip.IP_PROTO_UDP: LayerKind.UDP
}


def decode(kind, buf, parent=None):
	"""
	kind -- LayerKind of the layer at the start of buf
	buf -- raw bytes
	parent -- view buf was taken from, kept as weak reference
	return -- decoded view
	"""
	return _CODECS[kind].decode(buf, parent)


def encode(v, context=None):
	"""
	Encode any view.

	context -- enclosing layer, needed by UDP/TCP if v has no parent
	return -- wire bytes
	"""
	return _CODECS[v.kind].encode(v, context)


def strip(kind, buf):
	"""Return the payload of the layer of type kind at the start of buf."""
	return _CODECS[kind].strip(buf)


def next_kind(v):
	"""
	return -- LayerKind of the payload of v or None if unknown or not present
	"""
	if v.kind is LayerKind.ETHERNET:
		return ETH_TYPE_KINDS.get(v.type)
	if v.kind is LayerKind.IP:
		if v.offset != 0:
			# non-first fragment: no upper layer header
			return None
		return IP_PROTO_KINDS.get(v.p)
	return None


def decode_all(buf, kind=LayerKind.ETHERNET):
	"""
	Decode buf layer by layer, starting with kind. Decoding stops on empty payloads
	and unknown types.

	return -- list of views, lowest layer first. Every view is the parent of its successor.
	"""
	views = []
	parent = None

	while kind is not None:
		v = decode(kind, buf, parent)
		views.append(v)

		if len(v.payload) == 0:
			break
		kind = next_kind(v)

		if kind is None:
			logger.debug("no decoder for payload of %s", v.__class__.__name__)
		parent = v
		buf = v.payload
	return views


def encode_all(views):
	"""
	Encode views as returned by decode_all(): starting at the highest layer the
	result of every layer becomes the payload of the layer below. The enclosing
	view is given as context, lengths and checksums are updated on every layer.

	return -- wire bytes of the lowest layer
	"""
	bts = b""

	for i in range(len(views) - 1, -1, -1):
		v = views[i]

		if i < len(views) - 1:
			v.payload = bts
		context = views[i - 1] if i > 0 else None
		bts = encode(v, context)
	return bts
