from struct import Struct

unpack_H = Struct(">H").unpack
pack_H = Struct(">H").pack
unpack_HH = Struct(">HH").unpack
pack_HH = Struct(">HH").pack
pack_BBB = Struct(">BBB").pack

pack_ipv4_header = Struct(">4s4sxBH").pack
pack_ipv6_header = Struct(">16s16sxBH").pack

pack_mac_pair = Struct(">6s6s").pack
pack_snap = Struct(">3sH").pack

pack_ipv4 = Struct("BBBB").pack
unpack_ipv4 = Struct("BBBB").unpack
pack_mac = Struct("BBBBBB").pack
unpack_mac = Struct("BBBBBB").unpack
