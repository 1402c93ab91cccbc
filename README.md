# tsprobe

Tools for working with MPEG transport streams and the UDP/RTP packet
captures that carry them: removing PIDs from `.ts` files, pulling
transport packets out of `.pcap` recordings, and a set of small library
helpers for frame decoding, stream address parsing, SCTE-35 section dumps
and TR 101 290 alarm summaries.

It uses only the Python standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Commands

### tsprobe-pid-drop

Copy a packet-aligned transport stream file, removing or keeping packets
by PID. A trailing partial packet is not copied.

```
tsprobe-pid-drop -i input.ts -o output.ts -R 0x1fff -R 0x32
```

- `-i <input.ts>` input file (required)
- `-o <output.ts>` output file (required)
- `-R 0xNNNN` remove a PID; may be repeated. `0x2000` removes every PID.
- `-A 0xNNNN` pass a PID again; may be repeated. `0x2000` passes every PID.

Options are applied in the order given, so to keep only PIDs 0x31 and
0x32:

```
tsprobe-pid-drop -i input.ts -o output.ts -R 0x2000 -A 0x31 -A 0x32
```

Every removed PID is listed on standard output before copying starts.

### tsprobe-pcap2ts

Extract transport packets sent to one UDP destination from a pcap
capture (Ethernet or loopback link layer, either byte order, microsecond
or nanosecond timestamps).

```
tsprobe-pcap2ts -i capture.pcap -o output.ts -a 234.1.1.1 -p 9200
```

- `-i <input.pcap>` capture file (required)
- `-o <output.ts>` output file
- `-a <address>` destination IPv4 address to extract (requires `-p`)
- `-p <port>` destination UDP port to extract (requires `-a`)
- `-v` increase verbosity; may be repeated
- `-r` raw mode: write each UDP payload untouched, keeping RTP or A/324
  headers

Without `-r`, a payload that does not begin with the 0x47 sync byte is
taken to carry a 12-byte RTP header, which is stripped; if it is neither
transport stream nor RTP, the command reports the packet number, dumps it
and exits with status 1.

## Library

- `tsprobe.ts` — `iter_packets`, `packet_pid`, `packets_on_pid`,
  `parse_hex_pid`, `hexdump`
- `tsprobe.parsers` — `parse_ippid` turns `a.b.c.d:port.pid` (decimal or
  `0x` hex PID) or `udp://host:port` into an `IpPid`; bad input raises
  `ParseError`
- `tsprobe.piddrop` — `PidFilter` (`remove`, `add`, `passes`, `dropped`)
  and `filter_stream`, which returns the packets read and written
- `tsprobe.pcapfile` — `read_pcap`, `PcapReader`, `PcapRecord`,
  `pcap_file_header`, `record_bytes`; malformed files raise
  `PcapFormatError`
- `tsprobe.pcap2ts` — `Extractor.process` handles one `PcapRecord` and
  keeps counts and a histogram of inter-packet intervals in milliseconds;
  `ExtractError` for payloads that are not transport stream
- `tsprobe.netpkt` — `decode_udp` turns an Ethernet/IPv4/UDP frame into a
  `UdpDatagram`; `strip_rtp` removes an RTP header ahead of whole TS packets
- `tsprobe.ancillary` — `parse_evertz_serial` (raises `EvertzError`) and
  `format_smpte_timecode`
- `tsprobe.scte35` — `format_section_dump` and `trigger_banner`
- `tsprobe.tr101290view` — `AlarmId`, `SummaryItem`, `render_summary`
  (screen cells for an alarm summary), `log_filename`
- `tsprobe.pcapqueue` — `PacketQueue`, a recycled buffer queue between a
  capture thread and a processing thread (`push`, `service`, `rebalance`)

Example:

```python
from tsprobe.parsers import parse_ippid
from tsprobe.piddrop import PidFilter, filter_stream

target = parse_ippid("227.1.20.80:4001.0x31")
print(target.ui_address_ip_pid)   # 227.1.20.80:4001.0x31

pid_filter = PidFilter()
pid_filter.remove(0x1FFF)
with open("input.ts", "rb") as src, open("output.ts", "wb") as dst:
    read, written = filter_stream(src, dst, pid_filter)
```

## What it does not do

- It does not capture live from network interfaces or join multicast
  groups; it reads files only.
- It does not decode PAT, PMT or SCTE-35 tables; `tsprobe.scte35` only
  formats section bytes for display.
- It does not parse PES packets, H.264/H.265 NAL units or picture timing,
  and does not classify payload types.
- It does not run TR 101 290 checks; `tsprobe.tr101290view` only lays out
  alarm states supplied by the caller.
- It has no interactive screen and does not record streams.