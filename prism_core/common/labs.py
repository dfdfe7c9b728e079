# prism_core/common/labs.py
"""
Lab disciplines, their orderable panels and the payment categories.

Static lookup data, loaded once at import. Nothing mutates it at runtime.
"""
from __future__ import annotations

from types import MappingProxyType

LAB_CONFIG = MappingProxyType({
    "fish": MappingProxyType({
        "label": "FISH",
        "panels": (
            "ALL", "MDS", "MDS-Extended", "Acute Leuk-NOS",
            "CML/MPN", "JMML", "CLL", "CLL+CCND1",
            "Lymphoma-not CLL", "HES", "T-PLL", "MM", "Other",
        ),
    }),
    "fcm": MappingProxyType({
        "label": "FCM",
        "panels": (
            "Acute Leuk", "CLPD", "MM-Diagnosis", "MM-MRD",
            "B-ALL-MRD", "T-ALL-MRD", "MDS", "B & T Tubes Acute Leuk",
            "CLPD-MRD", "Mast Cell Tube", "Neuroblastoma", "Other",
        ),
    }),
    "rtpcr": MappingProxyType({
        "label": "RT-PCR",
        "panels": (
            "Acute Leukemia Panel", "BCR-ABL1", "JAK2",
            "CML/MPN Panel", "MYD88", "BRAF",
            "ddPCR-MRD", "qPCR-MRD", "Other",
        ),
    }),
    "ngsh12": MappingProxyType({
        "label": "NGS-H12",
        "panels": (
            "Myeloid Mutation Panel", "Lymphoid Mutation Panel",
            "TP53 Only", "Other",
        ),
    }),
    "ngsh9": MappingProxyType({
        "label": "NGS-H9",
        "panels": (
            "RNA Fusion Panel", "IBMFS Panel", "WES with CNV",
            "TCR by NGS", "T-ALL Somatic", "Other",
        ),
    }),
    "tcr": MappingProxyType({
        "label": "TCR",
        "panels": ("TCR Beta", "TCR Gamma", "Other"),
    }),
})

VALID_LABS: tuple[str, ...] = tuple(LAB_CONFIG.keys())

LAB_CHOICES = [(code, cfg["label"]) for code, cfg in LAB_CONFIG.items()]

VALID_PAYMENT: tuple[str, ...] = (
    "✅ Paid", "Ayushman", "Poor Free", "JSSK",
    "HIMCARE", "❌ Not Paid", "PP", "HP", "OK",
)


def lab_label(lab_kind: str) -> str:
    cfg = LAB_CONFIG.get(lab_kind)
    return cfg["label"] if cfg else lab_kind.upper()


def panels_for(lab_kind: str) -> tuple[str, ...]:
    return LAB_CONFIG[lab_kind]["panels"]
