"""
Generic SMS extraction patterns for Indian bank transaction alerts.
Used for every sender unless the institution ships an override rule set.
"""

import re

# Amounts: Rs.500, Rs 500, INR 500, Rs.5,00,000.00, ₹500
AMOUNT_PATTERN = r"(?i)(?<![a-z])(?:Rs\.?|₹|INR)\s*(-?[\d,]+(?:\.\d{1,2})?)"

# Balance after transaction: Bal Rs.3305.19, Bal:Rs 500, Avl Bal Rs.1000
BALANCE_PATTERN = (
    r"(?i)(?:Bal|Balance|Avl\.?\s*Bal|Available\s*Bal)[:\s]*(?:Rs\.?|₹|INR)\s*(-?[\d,]+(?:\.\d{1,2})?)"
)

# Card limits look like amounts but are never the transaction amount
LIMIT_PATTERN = (
    r"(?i)(?:Avl\.?\s*Lmt|Avl\.?\s*Limit|Available\s*(?:Credit\s*)?Limit)[:\s]*(?:Rs\.?|₹|INR)\s*"
    r"([\d,]+(?:\.\d{1,2})?)"
)

# Reference numbers (UTR, REF, TXN, RRN); must contain a digit so "Reversed" never matches
REFERENCE_PATTERN = (
    r"(?i)(?:Ref\.?|UTR|TXN|RRN|UPI|Ref\s*No\.?|Reference)[:\s#]*([A-Z0-9]*\d[A-Z0-9]{5,21})"
)

UPI_REFERENCE_PATTERN = (
    r"(?i)(?:UPI\s*(?:Ref(?:erence)?|Txn|Transaction)\s*(?:ID|No|Number)?|Google\s*Ref\s*ID|"
    r"PhonePe\s*Txn\s*ID|Paytm\s*Txn\s*ID|Txn\s*(?:ID|No)|Transaction\s*(?:ID|No)|UTR)"
    r"[:\s#]*([A-Z0-9]*\d[A-Z0-9]{5,21})"
)

# Account/card number: XX1234, A/c XX1234, Acct ending 1234, Card x3255
ACCOUNT_PATTERN = r"(?i)(?:A/?c|Acct?|Account|Card|ending)[:\s]*(?:no\.?)?[:\s]*[Xx*]*(\d{4,})"

# ATM/branch location: "At MG ROAD BR On 2026..."
LOCATION_PATTERN = r"(?i)\bat\s+([A-Za-z0-9\s]+?(?:BR|ATM|BRANCH)?)\s+on\s+\d{4}"

OTP_PATTERN = r"(?i)\bOTP\b|One\s*Time\s*Password|verification\s*code|\bCVV\b"

UPI_HANDLES = (
    "paytm|okaxis|okicici|okhdfcbank|okhdfc|oksbi|ybl|ibl|axl|axisbank|axis|sbi|sbibank|icici|"
    "icicib(?:ank)?|hdfc|hdfcbank|upi|apl|indianbank|indbank|pnb|bob|unionbank|ubibank|canara|"
    "canarabank|cboi|cbin|barodapay|federal|rbl|idfc|idfcbank|kotak|kotakbank|indus|indusind|yes|"
    "yesbank|dbs|sc|hsbc|citi|citibank|jupiter|freecharge|mobikwik|airtel|olamoney|jio|postbank|"
    "equitas|dcu|cub"
)

# UPI virtual payment address: merchant@okaxis, name@ybl
VPA_PATTERN = r"(?i)\b([a-z0-9][a-z0-9._-]{2,}@(?:" + UPI_HANDLES + r"))\b"

VPA_WITH_CONTEXT_PATTERN = (
    r"(?i)(?:\bto|\bfrom|\bVPA:?|\bUPI\s*ID:?|\bpaid\s*to|\breceived\s*from|\bsent\s*to)\s+"
    r"([a-z0-9][a-z0-9._-]{2,}@(?:" + UPI_HANDLES + r"))\b"
)

# UPI apps and bank UPI sender IDs
UPI_SENDER_PATTERN = (
    r"(?i)(?:^[A-Z]{2}-)?(?:GOOGL(?:E)?PAY|GPAY|G-?PAY|PHONEPE|PHONPE|PAYTM|PYTMPA|AMAZONP|AZNPAY|"
    r"AMAZON-?PAY|BHIM|NPCI(?:UPI)?|UPIAPP|IMOBILE|IMOBL|YONO(?:SBI)?|SBIYONO|SBIPAY|SBIUPI|HDFCUPI|"
    r"HDFCPAY|ICICIPAY|AXISPAY|IDFCPAY|KOTAKUPI|BOBUPI|PNBUPI|PNBPAY|CANARAUPI|UNIONUPI|UNIONPAY)"
)

# Sender ID decorations added by carriers: "VM-HDFCBK", "JD-HDFCBK-S"
CARRIER_PREFIX_PATTERN = r"^[A-Z0-9]{2}-"
TRAI_SUFFIX_PATTERN = r"-[PSTG]$"

# Direction keywords. Strong verbs decide first; weak nouns only when no verb matched.
DIRECTION_PATTERNS = {
    "debit": {
        "strong": [
            r"\bdebited\b", r"\bwithdrawn\b", r"\bspent\b", r"\bdeducted\b",
            r"\bpaid\b", r"\bsent\b", r"\btransferred\b", r"\bpurchase[ds]?\b",
            r"\bused\s+(?:for|at)\b",
        ],
        "weak": [
            r"\bdebit\b(?!\s*card)", r"\bpayment\b",
            r"\bUPI[\s-](?:txn|transaction|payment|transfer|debit)\b",
        ],
        "description": "Money leaving the account",
    },
    "credit": {
        "strong": [
            r"\bcredited\b", r"\breceived\b", r"\bdeposited\b", r"\brefund(?:ed)?\b",
            r"\bcashback\b", r"\breversed\b", r"\badded\b",
        ],
        "weak": [
            r"\bcredit\b(?!\s*card)",
            r"\bUPI[\s-](?:credit|refund)\b",
        ],
        "description": "Money entering the account",
    },
}

# Payment channels, checked in order (non-UPI messages only)
CHANNEL_PATTERNS = {
    "ATM": [r"\bATM\b", r"\bATW\b", r"\bcash\s+withdraw"],
    "NEFT": [r"\bNEFT\b"],
    "RTGS": [r"\bRTGS\b"],
    "IMPS": [r"\bIMPS\b"],
    "Card": [r"\bcard\b", r"\bPOS\b"],
    "Net Banking": [r"\bnet\s*banking\b", r"\bNetBanking\b"],
}

# Company suffixes stripped from merchant names
MERCHANT_NOISE_PATTERN = r"(?i)\s+(PVT\.?\s*LTD\.?|LTD\.?|LIMITED|INC\.?|CORP\.?|CO\.?)\s*$"

# Merchant sub-patterns; first capturing group is the merchant name
_MERCHANT_END = r"(?=\s+(?:on|Ref|UPI|A/?c|Rs\.?|INR|via|using|Avl|txn)\b|\s*[.@(]|\s*$)"
_NOT_AN_ACCOUNT = r"(?!(?:your\s+)?(?:VPA|A/?c|Acct?|account|card|mobile|ATM)\b)"

MERCHANT_PATTERNS = {
    "payee_phrase": (
        r"(?i)\b(?:(?:paid|sent|transferred)\s+to|received\s+from)\s+" + _NOT_AN_ACCOUNT
        + r"([A-Za-z0-9][A-Za-z0-9\s&',-]{1,48}?)" + _MERCHANT_END
    ),
    "vpa": r"(?i)\bVPA[:\s]*([a-z0-9][a-z0-9._-]{2,})@[a-z]+",
    "at": (
        r"(?i)\bat\s+" + _NOT_AN_ACCOUNT
        + r"([A-Za-z0-9][A-Za-z0-9\s&'*-]{1,48}?)" + _MERCHANT_END
    ),
    "to_from": (
        r"(?i)\b(?:to|from)\s+" + _NOT_AN_ACCOUNT
        + r"([A-Za-z][A-Za-z0-9\s&',-]{1,48}?)" + _MERCHANT_END
    ),
    "info": r"(?i)\bInfo[:\s-]*([A-Za-z0-9][A-Za-z0-9\s&'*/-]{1,48}?)(?=\s*\.(?:\s|$)|\s+(?:Avl|on)\b|\s*$)",
}

# Compiled forms
AMOUNT_RE = re.compile(AMOUNT_PATTERN)
BALANCE_RE = re.compile(BALANCE_PATTERN)
LIMIT_RE = re.compile(LIMIT_PATTERN)
REFERENCE_RE = re.compile(REFERENCE_PATTERN)
UPI_REFERENCE_RE = re.compile(UPI_REFERENCE_PATTERN)
ACCOUNT_RE = re.compile(ACCOUNT_PATTERN)
LOCATION_RE = re.compile(LOCATION_PATTERN)
OTP_RE = re.compile(OTP_PATTERN)
VPA_RE = re.compile(VPA_PATTERN)
VPA_WITH_CONTEXT_RE = re.compile(VPA_WITH_CONTEXT_PATTERN)
UPI_SENDER_RE = re.compile(UPI_SENDER_PATTERN)
UPI_KEYWORD_RE = re.compile(r"(?i)\bUPI\b")
CARRIER_PREFIX_RE = re.compile(CARRIER_PREFIX_PATTERN)
TRAI_SUFFIX_RE = re.compile(TRAI_SUFFIX_PATTERN)
MERCHANT_NOISE_RE = re.compile(MERCHANT_NOISE_PATTERN)

DIRECTION_RES = {
    direction: {
        tier: [re.compile(pattern, re.IGNORECASE) for pattern in info[tier]]
        for tier in ("strong", "weak")
    }
    for direction, info in DIRECTION_PATTERNS.items()
}

CHANNEL_RES = [
    (channel, [re.compile(pattern, re.IGNORECASE) for pattern in patterns])
    for channel, patterns in CHANNEL_PATTERNS.items()
]

MERCHANT_RES = {name: re.compile(pattern) for name, pattern in MERCHANT_PATTERNS.items()}
