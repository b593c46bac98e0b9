import struct
import logging

logger = logging.getLogger("pktview")


def empty_value(fmt):
	"""
	fmt -- struct format of a header field
	return -- value of a field whose bytes are missing: b"" for byte strings, 0 otherwise
	"""
	return b"" if fmt.endswith("s") else 0


def configure_view_header(t, hdrs, byte_order):
	"""
	Compute offsets and per-field formats for every ("name", "format", default)
	tuple in hdrs and store them in t._header_fields.
	"""
	offset = 0
	header_fmt = [byte_order]

	for hdr in hdrs:
		if len(hdr) != 3:
			logger.warning("field definition length != 3: %s has length %d", hdr[0], len(hdr))
		name, fmt, default = hdr[0], hdr[1], hdr[2]
		field_struct = struct.Struct(byte_order + fmt)
		t._header_fields.append((name, field_struct, offset, default))
		t._header_field_names.append(name)
		header_fmt.append(fmt)
		offset += field_struct.size

	t._header_format = struct.Struct("".join(header_fmt))
	t._header_len = t._header_format.size


class MetaView(type):
	"""
	Reads name, format and default value out of the __hdr__ tuple of every View
	subclass one time when loading the module (not at instantiation).

	Header defintition example:
	__hdr__ = (
		("sport", "H", 0xdead),		# 2 byte unsigned int
		("src", "4s", b"\\x00" * 4),	# 4 byte string
	)

	Fields are plain instance attributes set to their default by View.__init__().
	Additional record fields which are not part of the fixed header (e.g. variable
	length addresses, options) are declared as class attributes holding their default.
	"""
	def __new__(mcs, clsname, clsbases, clsdict):
		t = type.__new__(mcs, clsname, clsbases, clsdict)
		# [(name, Struct, offset, default), ...]
		t._header_fields = []
		t._header_field_names = []
		t._header_format_order = getattr(t, "__byte_order__", ">")

		hdrs = getattr(t, "__hdr__", None)

		if hdrs is None:
			hdrs = ()
		configure_view_header(t, hdrs, t._header_format_order)
		return t
