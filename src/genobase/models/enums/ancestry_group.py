from enum import Enum


class AncestryGroup(str, Enum):
    """Ancestry groups used to stratify allele frequencies, as found in gnomAD v3."""

    ALL = "ALL"
    # African/African American
    AFR = "AFR"
    # Amish
    AMI = "AMI"
    # Admixed American (Latino)
    AMR = "AMR"
    # Ashkenazi Jewish
    ASJ = "ASJ"
    # East Asian
    EAS = "EAS"
    # Finnish
    FIN = "FIN"
    # Middle Eastern
    MID = "MID"
    # Non-Finnish European
    NFE = "NFE"
    # South Asian
    SAS = "SAS"
    # Everyone else
    OTH = "OTH"
