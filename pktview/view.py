"""
Layer views: decoded, in-memory representations of one protocol layer.
"""
import collections
import enum
import logging
import struct
import weakref

from pktview.view_meta import MetaView, empty_value
from pktview.structcbs import pack_ipv4, unpack_ipv4, unpack_mac

logger = logging.getLogger("pktview")
# logger.setLevel(logging.DEBUG)
logger.setLevel(logging.WARNING)

logger_streamhandler = logging.StreamHandler()
logger_formatter = logging.Formatter("%(levelname)s (%(funcName)s): %(message)s")
logger_streamhandler.setFormatter(logger_formatter)

logger.addHandler(logger_streamhandler)


class Error(Exception):
	pass


class MissingContextError(Error):
	"""A layer needs fields of its enclosing layer which were not given."""
	pass


class PackError(Error):
	"""A field value can't be represented in its wire format."""
	pass


class LayerKind(enum.Enum):
	ETHERNET	= "ethernet"
	ARP		= "arp"
	IP		= "ip"
	ICMP		= "icmp"
	IGMP		= "igmp"
	UDP		= "udp"
	TCP		= "tcp"


# Minimal checksum context for transport layers: anything having src/dst works, e.g. an IP view
Context = collections.namedtuple("Context", ["src", "dst"])


class View(object, metaclass=MetaView):
	"""
	Base record for all layers. A view binds:

	- the header fields given by __hdr__ as plain attributes (ints in host order,
		addresses as bytes)
	- payload: everything after the header of this layer
	- parent: a weak reference to the view this one was decoded from. It's only
		used to look up cross-layer fields like the IP addresses for transport checksums.
	- frame: the raw bytes this view was decoded from, for inspection only

	Views don't know how to decode or encode themselves: this is done by the
	decode()/encode()/strip() functions of the protocol modules, see pktview.layer
	for dispatching by kind.
	"""
	__hdr__ = ()
	__kind__ = None
	# additional record fields shown by __repr__
	__hdr_extra__ = ()

	def __init__(self, **kwargs):
		for name, _, _, default in self._header_fields:
			setattr(self, name, default)
		self.payload = b""
		self.frame = b""
		self._parent = None

		for k, v in kwargs.items():
			setattr(self, k, v)

	kind = property(lambda obj: obj.__kind__)

	def _get_parent(self):
		if self._parent is None:
			return None
		return self._parent()

	def _set_parent(self, value):
		self._parent = weakref.ref(value) if value is not None else None

	parent = property(_get_parent, _set_parent)

	# length of the fixed part of the header given by __hdr__
	header_len = property(lambda obj: obj._header_len)

	def _unpack_header(self, buf):
		"""
		Set all __hdr__ fields from the start of buf. Fields which are not completely
		contained in buf get their empty value (0 or b"").

		return -- amount of header bytes read: header_len or less on truncated input
		"""
		buflen = len(buf)

		if buflen >= self._header_len:
			values = self._header_format.unpack_from(buf)

			for name, value in zip(self._header_field_names, values):
				setattr(self, name, value)
			return self._header_len

		logger.debug("truncated %s header: %d/%d bytes", self.__class__.__name__, buflen, self._header_len)

		for name, field_struct, offset, _ in self._header_fields:
			if offset + field_struct.size <= buflen:
				value = field_struct.unpack_from(buf, offset)[0]
			else:
				value = empty_value(field_struct.format)
			setattr(self, name, value)
		return buflen

	def _pack_header(self, **fields):
		"""
		fields -- values to be packed instead of the current ones, the view is not changed
		return -- all __hdr__ fields as big endian bytes
		"""
		header_values = [fields[name] if name in fields else getattr(self, name)
			for name in self._header_field_names]

		try:
			return self._header_format.pack(*header_values)
		except struct.error as e:
			logger.warning("Could not pack header data. Did some header value exceed specified format?"
						" (e.g. 500 -> 'B'): %r", e)
			raise PackError("could not pack %s header: %s" % (self.__class__.__name__, e))

	def _summarize(self):
		l = []

		for name in self._header_field_names + list(self.__hdr_extra__):
			val = getattr(self, name)

			if type(val) is int:
				l.append("%s=%X" % (name, val))
			else:
				l.append("%s=%r" % (name, val))
		l.append("payload=%r" % self.payload)
		return "%s(%s)" % (self.__class__.__name__, ", ".join(l))

	def __repr__(self):
		return self._summarize()


def declared_payload(buf, hlen, total_len):
	"""
	Cut the payload out of buf using a length declared in the header.

	hlen -- header length, payload starts here
	total_len -- header + payload length as declared in the header
	return -- buf[hlen:total_len] if the declared length is trustworthy, else buf[hlen:]
	"""
	if hlen <= total_len <= len(buf):
		return buf[hlen: total_len]
	logger.debug("untrusted length: header=%d, declared=%d, buffer=%d", hlen, total_len, len(buf))
	return buf[hlen:]


def pad_opts(opts):
	"""
	Pad options with zero bytes (end of option list) to a multiple of 4 bytes.
	"""
	rest = len(opts) % 4

	if rest != 0:
		opts = opts + b"\x00" * (4 - rest)
	return opts


def parse_opts(buf, single_types):
	"""
	Split IP/TCP-style options into a list of (type, data) tuples.

	single_types -- option types which consist of the type byte only (e.g. NOP)
	return -- [(type, data), ...], data is b"" for single byte options
	"""
	optlist = []
	i = 0

	while i < len(buf):
		if buf[i] in single_types:
			optlist.append((buf[i], b""))
			i += 1
			continue
		if i + 1 >= len(buf):
			# type without length byte
			optlist.append((buf[i], b""))
			break
		olen = buf[i + 1]

		if olen < 2:
			logger.debug("invalid option length %d for type %d", olen, buf[i])
			optlist.append((buf[i], buf[i + 2:]))
			break
		optlist.append((buf[i], buf[i + 2: i + olen]))
		i += olen
	return optlist


# MAC address
def mac_str_to_bytes(mac_str):
	"""Convert mac address AA:BB:CC:DD:EE:FF to byte representation."""
	return b"".join([bytes.fromhex(x) for x in mac_str.split(":")])


def mac_bytes_to_str(mac_bytes):
	"""
	Convert mac address from byte representation to AA:BB:CC:DD:EE:FF.
	return -- "" for addresses of the wrong length (truncated input)
	"""
	if len(mac_bytes) != 6:
		return ""
	return "%02X:%02X:%02X:%02X:%02X:%02X" % unpack_mac(mac_bytes)


def get_property_mac(varname):
	"""Create a get/set-property for a MAC address as string-representation."""
	return property(
		lambda obj: mac_bytes_to_str(getattr(obj, varname)),
		lambda obj, val: setattr(obj, varname, mac_str_to_bytes(val))
	)


# IPv4 address
def ip4_str_to_bytes(ip_str):
	"""Convert ip address 127.0.0.1 to byte representation."""
	ips = [int(x) for x in ip_str.split(".")]
	return pack_ipv4(ips[0], ips[1], ips[2], ips[3])


def ip4_bytes_to_str(ip_bytes):
	"""
	Convert ip address from byte representation to 127.0.0.1.
	return -- "" for addresses of the wrong length (truncated input)
	"""
	if len(ip_bytes) != 4:
		return ""
	return "%d.%d.%d.%d" % unpack_ipv4(ip_bytes)


def get_property_ip4(var):
	"""Create a get/set-property for an IP4 address as string-representation."""
	return property(
		lambda obj: ip4_bytes_to_str(getattr(obj, var)),
		lambda obj, val: setattr(obj, var, ip4_str_to_bytes(val))
	)
