"""Splicer header: counts, splice table and job summary.

The header is written ahead of the program body once generation has
finished, since it needs the final ledgers.
"""

from typing import TextIO

from bleed_squares.encoding import float_to_hex, hex_field
from bleed_squares.ledger import PingLedger, SpliceLedger
from bleed_squares.models import GenerationSettings

SPLICE_ALGORITHM_COUNT = 1
HOTSWAP_COUNT = 0


class HeaderEncoder:
    """Serialize the ledgers into the splicer's ``O``-command header.

    Args:
        printer_profile_id: Splicer printer profile identifier
        settings: Supplies the input color table, job name and format version
    """

    def __init__(self, printer_profile_id: str, settings: GenerationSettings) -> None:
        self.printer_profile_id = printer_profile_id
        self.settings = settings

    def encode(
        self,
        out: TextIO,
        splices: SpliceLedger,
        pings: PingLedger,
        total_extruded: float,
    ) -> None:
        """Write the header, the splice diagnostics and the printer reset block.

        Raises:
            EncodingOverflowError: If a count does not fit its field width
        """
        s = self.settings
        version = hex_field(s.msf_version, 4, "msf version")
        inputs = " ".join(i.encode() for i in s.inputs)
        n_splices = hex_field(len(splices), 4, "splice count")
        n_pings = hex_field(len(pings), 4, "ping count")
        total = hex_field(int(total_extruded), 8, "total extrusion")

        out.write(
            f"O21 D{version} ; msf version {s.msf_version // 10}.{s.msf_version % 10} "
            f"({s.msf_version} = {s.msf_version:#x})\n"
        )
        out.write(f"O22 D{self.printer_profile_id}\n")
        out.write("O23 D0001 ; unused\n")
        out.write("O24 D0000 ; unused\n")
        out.write(f"O25 {inputs} ; inputs: filament type + hex color + color_material\n")
        out.write(f"O26 D{n_splices} ; number of splices\n")
        out.write(f"O27 D{n_pings} ; number of pings\n")
        out.write(
            f"O28 D{hex_field(SPLICE_ALGORITHM_COUNT, 4, 'splice algorithm count')}"
            " ; number of splice algorithms\n"
        )
        out.write(f"O29 D{hex_field(HOTSWAP_COUNT, 4, 'hotswap count')} ; number of hotswaps\n")
        for splice in splices:
            out.write(f"O30 D{splice.tool} {float_to_hex(splice.end)}\n")
        out.write("O32 D11 D0000 D0000 D0000 ; splice algorithm table\n")
        out.write(f"O1 D{s.job_name} D{total}\n")

        out.write("\n\n\n")
        for splice in splices:
            out.write(
                f"; Tool: {splice.tool} Location: {splice.position:.2f} "
                f"length {splice.length:.2f}  ends {splice.end:.2f} "
                f"({float_to_hex(splice.end)})\n"
            )
        out.write("\n\n\n")

        out.write("M0\n")
        out.write("T0\n")
        out.write("M107\n")
