from pktview import layer
from pktview.view import Context, LayerKind
from pktview.layer12 import ethernet
from pktview.layer3 import ip, icmp
from pktview.layer4 import udp

##
## decode raw bytes
##
BYTES_ETH_IP_ICMPREQ	= b"\x52\x54\x00\x12\x35\x02\x08\x00\x27\xa9\x93\x9e\x08\x00\x45\x00\x00\x54\x00\x00\x40\x00\x40\x01\x54\xc1\x0a\x00" + \
			  b"\x02\x0f\xad\xc2\x2c\x17\x08\x00\xec\x66\x09\xb1\x00\x01\xd0\xd5\x18\x51\x28\xbd\x05\x00\x08\x09\x0a\x0b\x0c\x0d" + \
			  b"\x0e\x0f\x10\x11\x12\x13\x14\x15\x16\x17\x18\x19\x1a\x1b\x1c\x1d\x1e\x1f\x20\x21\x22\x23\x24\x25\x26\x27\x28\x29" + \
			  b"\x2a\x2b\x2c\x2d\x2e\x2f\x30\x31\x32\x33\x34\x35\x36\x37"
views = layer.decode_all(BYTES_ETH_IP_ICMPREQ)

for v in views:
	print("found layer: %s" % v)
# layer by layer
eth1 = ethernet.decode(BYTES_ETH_IP_ICMPREQ)
ip1 = ip.decode(eth1.payload, eth1)
icmp1 = icmp.decode(ip1.payload, ip1)
print("%s -> %s, icmp type: %d" % (ip1.src_s, ip1.dst_s, icmp1.type))

##
## change and encode again: lengths and checksums are updated
##
views[1].dst_s = "10.0.2.2"
print("packet as bytes: %s" % layer.encode_all(views))

##
## create custom views
##
udp1 = udp.UDP(sport=12345, dport=53, payload=b"ping")
ip1 = ip.IP(src_s="192.168.0.1", dst_s="192.168.0.2", p=ip.IP_PROTO_UDP)
eth1 = ethernet.Ethernet(dst_s="aa:bb:cc:dd:ee:ff", src_s="ff:ee:dd:cc:bb:aa")
print("custom packet: %s" % layer.encode_all([eth1, ip1, udp1]))
# transport checksums without an IP view
print("udp only: %s" % udp.encode(udp1, Context(ip1.src, ip1.dst)))
print("payload of UDP: %s" % layer.strip(LayerKind.UDP, udp.encode(udp1, ip1)))
