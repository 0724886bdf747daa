"""Default templates and correction dictionary installed on first run."""

from befundtool.report.types import CorrectionEntry, Template

DEFAULT_TEMPLATES = [
    Template(
        id="tpl-ct-abdomen",
        name="CT Abdomen/Becken",
        keywords=("abdomen", "becken", "leber", "niere", "milz", "pankreas", "ct"),
        normal_befund_text=(
            "Leber normgross, homogene Parenchymstruktur. Keine fokalen Läsionen.\n\n"
            "Gallenblase zart, keine Konkremente. Keine Erweiterung der Gallenwege.\n\n"
            "Pankreas, Milz und Nebennieren unauffällig.\n\n"
            "Nieren beidseits normgross, kein Harnstau.\n\n"
            "Keine vergrösserten Lymphknoten. Keine freie Flüssigkeit."
        ),
    ),
    Template(
        id="tpl-ct-thorax",
        name="CT Thorax",
        keywords=("thorax", "lunge", "pleura", "mediastinum", "rundherd", "ct"),
        normal_befund_text=(
            "Lunge beidseits regelrecht belüftet. Keine Rundherde, keine Infiltrate.\n\n"
            "Kein Pleuraerguss, kein Pneumothorax.\n\n"
            "Mediastinum und Hili ohne vergrösserte Lymphknoten.\n\n"
            "Herz normgross, kein Perikarderguss."
        ),
    ),
    Template(
        id="tpl-ct-schaedel",
        name="CT Schädel nativ",
        keywords=("schädel", "kopf", "blutung", "hirn", "ischämie"),
        normal_befund_text=(
            "Keine intrakranielle Blutung. Keine Demarkierung einer frischen Ischämie.\n\n"
            "Normal weite innere und äussere Liquorräume. Mittellinie nicht verlagert.\n\n"
            "Kalotte intakt."
        ),
    ),
    Template(
        id="tpl-mrt-knie",
        name="MRT Knie",
        keywords=("knie", "meniskus", "kreuzband", "vkb", "hkb", "patella"),
        normal_befund_text=(
            "Kein Gelenkerguss.\n\n"
            "Innen- und Aussenmeniskus ohne Rissbildung.\n\n"
            "VKB und HKB durchgehend abgrenzbar. Kollateralbänder intakt.\n\n"
            "Retropatellarknorpel glatt begrenzt. Kein Knochenmarködem."
        ),
    ),
    Template(
        id="tpl-mrt-prostata",
        name="MRT Prostata",
        keywords=("prostata", "pi-rads", "t2w", "dwi", "adc"),
        normal_befund_text=(
            "Prostatavolumen normal.\n\n"
            "Periphere Zone homogen signalreich in T2w. Keine Diffusionsrestriktion in DWI/ADC.\n\n"
            "Transitionalzone ohne suspekte Läsion.\n\n"
            "Samenblasen unauffällig. Keine suspekten Lymphknoten."
        ),
    ),
    Template(
        id="tpl-us-abdomen",
        name="Sonographie Abdomen",
        keywords=("sonographie", "ultraschall", "leber", "gallenblase", "niere"),
        normal_befund_text=(
            "Leber normgross, glatt berandet, homogenes Echomuster.\n\n"
            "Gallenblase zartwandig, echofrei.\n\n"
            "Nieren beidseits normgross, Parenchym regelrecht, kein Harnstau.\n\n"
            "Milz normgross. Keine freie Flüssigkeit."
        ),
    ),
]

DEFAULT_CORRECTIONS = [
    CorrectionEntry(id="c1", wrong="pirats", correct="PI-RADS"),
    CorrectionEntry(id="c2", wrong="pirads", correct="PI-RADS"),
    CorrectionEntry(id="c3", wrong="adik", correct="ADC"),
    CorrectionEntry(id="c4", wrong="vkb", correct="VKB"),
    CorrectionEntry(id="c5", wrong="hkb", correct="HKB"),
    CorrectionEntry(id="c6", wrong="t2w", correct="T2w"),
    CorrectionEntry(id="c7", wrong="dwi", correct="DWI"),
    CorrectionEntry(id="c8", wrong="flair", correct="FLAIR"),
    CorrectionEntry(id="c9", wrong="stir", correct="STIR"),
    CorrectionEntry(id="c10", wrong="hounsfield", correct="Hounsfield"),
]
