"""
Supported institutions for SMS transaction alerts.

Maps each bank, payments bank and card issuer to its display name, the
sender IDs it uses for transaction alerts, and an optional rule-set
override. Institutions without "patterns" follow the generic format in
sms_patterns, which covers almost every Indian bank.
"""

# Override rule sets, keyed by the pattern they replace
ICICI_CARD_PATTERNS = {
    # "INR 1,500.00 spent using ICICI Bank Card XX1234 on 03-Jan-26 on AMAZON. Avl Limit: INR 48,500.00"
    "merchant_pattern": (
        r"(?i)\bon\s+\d{1,2}-[A-Za-z]{3}-\d{2,4}\s+(?:on|at)\s+"
        r"([A-Za-z0-9][A-Za-z0-9\s&.'*-]{1,48}?)\.\s*Avl"
    ),
}

IPPB_PATTERNS = {
    # "A/C X1234 Debit Amt:500.00 on 03-01-26 Avl.Bal:10,250.00 Ref.No:IPPB12345678"
    "amount_pattern": r"(?i)\bAmt[:\s]*(?:Rs\.?|₹|INR)?\s*(-?[\d,]+(?:\.\d{1,2})?)",
    "balance_pattern": r"(?i)\bAvl\.?\s*Bal[:\s]*(?:Rs\.?|₹|INR)?\s*(-?[\d,]+(?:\.\d{1,2})?)",
    "reference_pattern": r"(?i)\bRef\.?\s*No[:.\s]*([A-Z0-9]*\d[A-Z0-9]{5,21})",
}


BANK_DEFINITIONS = {
    "HDFC Bank": {
        "display_name": "HDFC",
        "sender_ids": [
            "VM-HDFCBK", "AD-HDFCBK", "HDFCBK", "HDFCBank", "HDFCCC",
            "HDFC", "HDFCUPI", "VM-HDFCCC", "AD-HDFCCC", "HDFCMB",
        ],
    },
    "State Bank of India": {
        "display_name": "SBI",
        "sender_ids": [
            "VM-SBIINB", "AD-SBIBNK", "SBI", "SBIINB", "SBIPSG",
            "VM-SBICard", "AD-SBicrd", "SBIUPI", "SBMSMS", "VM-SBIATM",
        ],
    },
    "ICICI Bank": {
        "display_name": "ICICI",
        "sender_ids": [
            "VM-ICICIB", "BZ-ICICIB", "ICICIB", "iMobile", "ICICIC",
            "ICICICC", "ICICIPB", "ICIUPI", "AD-ICICIB", "VM-ICIPRU",
        ],
        "patterns": ICICI_CARD_PATTERNS,
    },
    "Axis Bank": {
        "display_name": "Axis",
        "sender_ids": [
            "VM-AXISBK", "AD-AXISBK", "AXISBK", "AxisBank", "AXISBNK",
            "AXISCRD", "AXISUPI", "VM-AXISCB", "AD-AXISCB", "AXISMB",
        ],
    },
    "Kotak Mahindra Bank": {
        "display_name": "Kotak",
        "sender_ids": [
            "VK-KOTAKB", "AD-KOTAKB", "KOTAKB", "Kotak", "KOTAKCC",
            "KOTAKUPI", "VK-KOTAKC", "AD-KOTAKC", "KOTAKMB",
        ],
    },
    "Punjab National Bank": {
        "display_name": "PNB",
        "sender_ids": [
            "VM-PNBSMS", "AD-PNBANK", "PNBSMS", "PNBANK", "PNB",
            "PNBUPI", "PNBMB", "PNBCC", "PNBATM", "AD-PNBCRD",
        ],
    },
    "Bank of Baroda": {
        "display_name": "BoB",
        "sender_ids": [
            "AD-BOBANK", "VM-BOBANK", "BOBANK", "BOBBNK", "BOB",
            "BOBUPI", "BOBMB", "BOBCC", "BOBATM", "AD-BOBCRD",
        ],
    },
    "Canara Bank": {
        "display_name": "Canara",
        "sender_ids": [
            "VM-CANBNK", "AD-CANARA", "CANBNK", "CANARA", "CANARABANK",
            "CANBNKUPI", "CANBNKMB", "CANBNKCC", "CANBNKATM", "AD-CANBNK",
        ],
    },
    "Union Bank of India": {
        "display_name": "Union Bank",
        "sender_ids": [
            "VM-UBIONL", "AD-UBIONL", "UBIONL", "UNIONBK", "UNIONBNK",
            "UBIUPI", "UBIMB", "UBICC", "UBIATM", "AD-UNIONB",
        ],
    },
    "Central Bank of India": {
        "display_name": "Central Bank",
        "sender_ids": [
            "VM-CNTBNK", "AD-CNTBNK", "CNTBNK", "CENBNK", "CBINDIA",
            "CBIUPI", "CBIMB", "CBICC", "CBIATM", "VM-CBICC",
        ],
    },
    "Indian Bank": {
        "display_name": "Indian Bank",
        "sender_ids": [
            "VM-INBBNK", "AD-INBBNK", "INBBNK", "INDIANBK", "INDBNK",
            "INBUPI", "INBMB", "INBCC", "INBATM", "VM-INBCC",
        ],
    },
    "IndusInd Bank": {
        "display_name": "IndusInd",
        "sender_ids": [
            "VM-ILOANS", "AD-INDUSB", "INDUSB", "IndusInd", "INDUSUPI",
            "INDUSMB", "INDUSCC", "INDUSATM", "VM-INDUSB",
        ],
    },
    "IDBI Bank": {
        "display_name": "IDBI",
        "sender_ids": [
            "VM-IDBIBK", "AD-IDBIBK", "IDBIBK", "IDBIBNK", "IDBI",
            "IDBIUPI", "IDBIMB", "IDBICC", "IDBIATM", "VM-IDBICC",
        ],
    },
    "IDFC First Bank": {
        "display_name": "IDFC First",
        "sender_ids": [
            "VM-IDFCFB", "AD-IDFCFB", "IDFCFB", "IDFCBNK", "IDFC",
            "IDFCUPI", "IDFCMB", "IDFCCC", "IDFCATM", "VM-IDFCCC",
        ],
    },
    "Yes Bank": {
        "display_name": "Yes Bank",
        "sender_ids": [
            "VM-YESBNK", "AD-YESBNK", "YESBNK", "YESBANK", "YES",
            "YESUPI", "YESMB", "YESCC", "YESATM", "VM-YESCC",
        ],
    },
    "Federal Bank": {
        "display_name": "Federal Bank",
        "sender_ids": [
            "VM-FEDBNK", "AD-FEDBNK", "FEDBNK", "FEDERALBK", "FEDERAL",
            "FEDUPI", "FEDMB", "FEDCC", "FEDATM", "VM-FEDCC",
        ],
    },
    "RBL Bank": {
        "display_name": "RBL Bank",
        "sender_ids": [
            "VM-RBLBNK", "AD-RBLBNK", "RBLBNK", "RBLBANK", "RBL",
            "RBLUPI", "RBLMB", "RBLCC", "RBLATM", "VM-RBLCC",
        ],
    },
    "South Indian Bank": {
        "display_name": "South Indian Bank",
        "sender_ids": [
            "VM-SIBSMS", "AD-SIBBNK", "SIBSMS", "SIBANK", "SIB",
            "SIBUPI", "SIBMB", "SIBCC", "SIBATM", "VM-SIBCC",
        ],
    },
    "Karnataka Bank": {
        "display_name": "Karnataka Bank",
        "sender_ids": [
            "VM-KTKBNK", "AD-KTKBNK", "KTKBNK", "KARBNK", "KTKBANK",
            "KTKUPI", "KTKMB", "KTKCC", "KTKATM", "VM-KTKCC",
        ],
    },
    "Bandhan Bank": {
        "display_name": "Bandhan Bank",
        "sender_ids": [
            "VM-BANDHN", "AD-BANDHN", "BANDHN", "BANDHAN", "BANDHANBK",
            "BANDUPI", "BANDMB", "BANDCC", "BANDATM", "VM-BANDCC",
        ],
    },
    "India Post Payments Bank": {
        "display_name": "IPPB",
        "sender_ids": [
            "VM-IPPBSM", "AD-IPPBSM", "IPPBSM", "IPPB", "POSTBK",
            "IPPBUPI", "IPPBMB", "INDIAPOST", "POSTBANK", "VM-IPPB",
        ],
        "patterns": IPPB_PATTERNS,
    },
    "Airtel Payments Bank": {
        "display_name": "Airtel",
        "sender_ids": [
            "VM-AIRTEL", "AD-AIRTPB", "AIRTPB", "AIRTEL", "AIRTELB",
            "AIRTELPB", "AIRTELUPI", "AIRTELMB", "VM-AIRTPB", "AD-AIRTEL",
        ],
    },
    "Paytm Payments Bank": {
        "display_name": "Paytm",
        "sender_ids": [
            "VM-PAYTMB", "AD-PYTMWL", "PAYTMB", "PAYTM", "PYTMWL",
            "VM-PAYTM", "AD-PAYTMB", "PAYTMUPI",
        ],
    },
    "Jio Payments Bank": {
        "display_name": "Jio",
        "sender_ids": [
            "VM-JIOMNY", "AD-JIOMNY", "JIOMNY", "JIOPAY", "JioMoney",
            "JIOUPI", "JIOMB", "VM-JIOPAY", "AD-JIOPAY", "JIOBK",
        ],
    },
    "Fino Payments Bank": {
        "display_name": "Fino",
        "sender_ids": [
            "VM-FINOPB", "AD-FINOPB", "FINOPB", "FINO", "FINOBANK",
            "FINOUPI", "FINOMB", "VM-FINO", "AD-FINO", "FINOPAY",
        ],
    },
    "Fi Money": {
        "display_name": "Fi",
        "sender_ids": [
            "FIMONEY", "VM-FIBNK", "AD-FIBNK", "FI", "FIUPI",
            "FIMB", "FICARD", "VM-FIMONY", "AD-FIMONY", "FIPAY",
        ],
    },
    "Jupiter": {
        "display_name": "Jupiter",
        "sender_ids": [
            "JUPITER", "VM-JUPBK", "AD-JUPBK", "JUPITERBK", "JUPUPI",
            "JUPMB", "JUPCARD", "VM-JUPTER", "AD-JUPTER", "JUPITERPAY",
        ],
    },
    "Niyo": {
        "display_name": "Niyo",
        "sender_ids": [
            "NIYO", "VM-NIYO", "AD-NIYO", "NIYOBNK", "NIYOUPI",
            "NIYOMB", "NIYOCARD", "NIYOPAY", "VM-NIYOGL", "NIYOEQ",
        ],
    },
    "OneCard": {
        "display_name": "OneCard",
        "sender_ids": [
            "ONECARD", "VM-ONECD", "AD-ONECD", "ONECRD", "ONECARDCC",
            "ONECARDPAY", "VM-ONECRD", "AD-ONECRD", "ONECARDUPI", "ONECARDMB",
        ],
    },
    "Slice": {
        "display_name": "Slice",
        "sender_ids": [
            "SLICE", "VM-SLICE", "AD-SLICE", "SLICECC", "SLICEPAY",
            "SLICECARD", "VM-SLICEC", "AD-SLICEC", "SLICEUPI", "SLICEMB",
        ],
    },
    "CRED": {
        "display_name": "CRED",
        "sender_ids": [
            "CRED", "VM-CRED", "AD-CRED", "CREDPAY", "CREDAPP",
            "VM-CREDP", "AD-CREDP", "CREDCLUB", "CREDMINT", "CREDPMT",
        ],
    },
}
