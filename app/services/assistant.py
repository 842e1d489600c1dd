"""
Assistant RTO : recherche par mots-clés dans une base de fiches figées.
Aucun appel externe, aucune mémoire : lookup() est une fonction pure.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from app.models.assistant import TopicRecord
from app.utils.text_utils import normalize_query

# Ordre significatif : la première clé qui correspond gagne.
TOPICS: Dict[str, TopicRecord] = {
    "ll": TopicRecord(
        summary="Learner's License (LL) is the first step to obtaining a driving license in India. "
                "It allows you to learn driving under supervision.",
        documents=[
            "Age proof (Birth Certificate, Aadhaar, Passport)",
            "Address proof (Aadhaar, Utility bill, Bank statement)",
            "4 passport size photographs",
            "Medical certificate (Form 1A) for certain categories",
        ],
        fees="Rs. 200 (varies by state)",
        steps=["Fill Form 1", "Submit documents at RTO", "Appear for LL test (written)", "Pass the test to receive LL"],
        timeline="7-15 days after passing the test",
        online="Available on Parivahan Sewa portal",
        offline="Visit nearest RTO office",
        tips=["Study traffic signs and rules thoroughly", "Practice mock tests online", "Carry all original documents"],
        sources=["Parivahan Sewa (parivahan.gov.in)", "State RTO website", "Motor Vehicles Act 1988"],
    ),
    "dl": TopicRecord(
        summary="Driving License (DL) is the official document that authorizes you to drive motor vehicles on public roads.",
        documents=[
            "Learner's License (valid for at least 30 days)",
            "Age and address proof",
            "4 passport photographs",
            "Driving test appointment receipt",
        ],
        fees="Rs. 500-2000 (varies by vehicle type and state)",
        steps=["Complete 30 days with LL", "Book driving test slot", "Appear for driving test", "Pass test to receive DL"],
        timeline="15-30 days after passing driving test",
        online="Available on Parivahan Sewa portal",
        offline="Visit RTO office for test",
        tips=[
            "Practice driving with a licensed driver",
            "Familiarize yourself with test route",
            "Ensure vehicle is in good condition",
        ],
        sources=["Parivahan Sewa", "State RTO", "Motor Vehicles Act 1988"],
    ),
    "rc": TopicRecord(
        summary="Registration Certificate (RC) is the official document proving vehicle ownership and registration with RTO.",
        documents=["Invoice from dealer", "Insurance certificate", "PUC certificate", "Address proof", "PAN card/Aadhaar"],
        fees="Rs. 300-1500 (varies by vehicle type)",
        steps=[
            "Purchase vehicle from dealer",
            "Dealer submits documents to RTO",
            "RTO processes registration",
            "Receive RC card",
        ],
        timeline="7-15 days from date of application",
        online="Track status on Parivahan portal",
        offline="Dealer handles registration process",
        tips=["Verify all details on invoice", "Ensure insurance is active", "Keep all documents safe"],
        sources=["Parivahan Sewa", "Vehicle dealer", "RTO office"],
    ),
    "rc transfer": TopicRecord(
        summary="RC Transfer is required when vehicle ownership changes, such as buying a used vehicle.",
        documents=[
            "Original RC",
            "NOC from previous owner",
            "Insurance certificate",
            "PUC certificate",
            "Address proof of new owner",
            "Sale agreement",
        ],
        fees="Rs. 500-2000 (varies by state)",
        steps=[
            "Obtain NOC from previous owner",
            "Submit Form 29 and 30 at RTO",
            "Pay transfer fees",
            "Complete verification",
            "Receive updated RC",
        ],
        timeline="15-30 days",
        online="Form submission available online",
        offline="Visit RTO for verification",
        tips=["Verify vehicle history", "Check for pending challans", "Ensure NOC is valid"],
        sources=["Parivahan Sewa", "RTO office"],
    ),
    "hypothecation removal": TopicRecord(
        summary="Hypothecation removal is required when vehicle loan is fully paid and you want to remove "
                "the financier's name from RC.",
        documents=[
            "Original RC",
            "Loan closure letter from bank",
            "NOC from financier",
            "Insurance certificate",
            "PUC certificate",
        ],
        fees="Rs. 200-500",
        steps=[
            "Obtain loan closure certificate",
            "Get NOC from financier",
            "Submit Form 35 at RTO",
            "Pay fees and complete process",
        ],
        timeline="7-15 days",
        online="Application available online",
        offline="Visit RTO for submission",
        tips=["Ensure all loan dues are cleared", "Get proper NOC from bank", "Keep closure certificate safe"],
        sources=["Parivahan Sewa", "Financing bank", "RTO office"],
    ),
    "noc": TopicRecord(
        summary="No Objection Certificate (NOC) is required when transferring vehicle registration to another state.",
        documents=[
            "Original RC",
            "Insurance certificate",
            "PUC certificate",
            "Address proof of new state",
            "Challan clearance certificate",
        ],
        fees="Rs. 100-500",
        steps=["Clear all pending challans", "Submit NOC application at current RTO", "Pay fees", "Receive NOC"],
        timeline="7-10 days",
        online="Application available online",
        offline="Visit RTO office",
        tips=["Clear all traffic violations first", "Ensure insurance is valid", "Get address proof for new state"],
        sources=["Parivahan Sewa", "RTO office"],
    ),
    "puc": TopicRecord(
        summary="Pollution Under Control (PUC) certificate is mandatory for all vehicles to ensure they meet "
                "emission standards.",
        documents=["RC or vehicle registration number", "Previous PUC (if renewing)"],
        fees="Rs. 50-200",
        steps=["Visit authorized PUC center", "Vehicle emission test", "Pay fees", "Receive PUC certificate"],
        timeline="Same day (immediate)",
        online="Available at authorized centers",
        offline="Visit PUC center",
        tips=["Get PUC before expiry", "Keep vehicle well-maintained", "Carry RC or vehicle number"],
        sources=["Authorized PUC centers", "Parivahan Sewa"],
    ),
    "insurance": TopicRecord(
        summary="Motor vehicle insurance is mandatory under the Motor Vehicles Act to cover third-party liability.",
        documents=["RC or vehicle details", "Previous insurance (if renewing)", "Identity proof"],
        fees="Varies by vehicle type and coverage (Rs. 2000-10000+)",
        steps=["Compare insurance plans", "Choose policy", "Submit documents", "Pay premium", "Receive policy"],
        timeline="Same day to 3 days",
        online="Available on insurance company websites",
        offline="Visit insurance office or agent",
        tips=[
            "Compare multiple insurers",
            "Check coverage details",
            "Renew before expiry",
            "Keep policy document safe",
        ],
        sources=["Insurance company websites", "IRDA approved insurers"],
    ),
    "state penalties": TopicRecord(
        summary="Traffic violation penalties vary by state and violation type as per the Motor Vehicles "
                "(Amendment) Act 2019.",
        documents=["Challan receipt", "Vehicle RC", "DL"],
        fees="Rs. 500-10000+ depending on violation",
        steps=["Receive challan", "Pay penalty online or offline", "Keep receipt", "Clear violation from record"],
        timeline="Immediate (online) or same day (offline)",
        online="Available on state traffic police portals",
        offline="Visit traffic police station or court",
        tips=[
            "Pay promptly to avoid additional charges",
            "Keep payment receipts",
            "Check for discounts on early payment",
        ],
        sources=["State traffic police websites", "Parivahan Sewa", "eChallan portals"],
    ),
    "international permit": TopicRecord(
        summary="International Driving Permit (IDP) allows you to drive in foreign countries that recognize "
                "Indian licenses.",
        documents=["Valid Indian DL", "Passport size photographs", "Passport copy", "Visa copy (if available)"],
        fees="Rs. 1000",
        steps=["Apply at RTO or through agent", "Submit documents", "Pay fees", "Receive IDP"],
        timeline="7-10 days",
        online="Application available online",
        offline="Visit RTO office",
        tips=["Apply well in advance of travel", "Ensure DL is valid", "Check country requirements"],
        sources=["RTO office", "Parivahan Sewa"],
    ),
    "license category": TopicRecord(
        summary="Adding a new vehicle category to existing driving license requires passing a driving test "
                "for that category.",
        documents=["Original DL", "Medical certificate (for commercial)", "Age proof", "Passport photographs"],
        fees="Rs. 500-2000",
        steps=["Apply for new category", "Book test slot", "Appear for driving test", "Pass test to get updated DL"],
        timeline="15-30 days after passing test",
        online="Available on Parivahan Sewa",
        offline="Visit RTO for test",
        tips=["Practice for specific vehicle type", "Ensure you meet age requirements", "Carry all documents"],
        sources=["Parivahan Sewa", "RTO office"],
    ),
    "scrappage": TopicRecord(
        summary="Vehicle scrappage policy allows you to officially scrap old vehicles and get benefits for "
                "purchasing new ones.",
        documents=["Original RC", "Vehicle", "Identity proof", "NOC from financier (if applicable)"],
        fees="Varies (may get benefits instead)",
        steps=[
            "Register vehicle for scrappage",
            "Get vehicle evaluated",
            "Scrap at authorized center",
            "Receive scrappage certificate",
            "Get benefits for new vehicle",
        ],
        timeline="15-30 days",
        online="Registration available online",
        offline="Visit authorized scrappage center",
        tips=["Check vehicle age eligibility", "Compare scrappage benefits", "Ensure all documents are ready"],
        sources=["Government scrappage portal", "Authorized scrappage centers"],
    ),
}

# Second passage : mots-clés -> fiche, dans l'ordre.
KEYWORDS: List[Tuple[Tuple[str, ...], str]] = [
    (("learner", "ll"), "ll"),
    (("driving license", "dl"), "dl"),
    (("registration", "rc"), "rc"),
    (("transfer",), "rc transfer"),
    (("hypothecation",), "hypothecation removal"),
    (("noc", "no objection"), "noc"),
    (("puc", "pollution"), "puc"),
    (("insurance",), "insurance"),
    (("penalty", "challan", "fine"), "state penalties"),
    (("international", "idp"), "international permit"),
    (("category", "add"), "license category"),
    (("scrap",), "scrappage"),
]

FALLBACK = TopicRecord(
    summary="I can help you with various RTO services. Please ask about: Learner's License (LL), "
            "Driving License (DL), RC Registration/Transfer, Hypothecation Removal, NOC, PUC, Insurance, "
            "State Penalties, International Permits, License Category Addition, or Vehicle Scrappage.",
    tips=[
        "Be specific about which RTO service you need help with",
        "Have your documents ready before applying",
    ],
    sources=["Parivahan Sewa (parivahan.gov.in)"],
)


def match_topic(query: str) -> Optional[str]:
    """
    Clé de la fiche correspondant à la requête, ou None.
    """
    q = normalize_query(query)
    if not q:
        return None

    for key in TOPICS:
        if key in q or q in key:
            return key

    for words, key in KEYWORDS:
        if any(w in q for w in words):
            return key
    return None


def lookup(query: str) -> TopicRecord:
    key = match_topic(query)
    return TOPICS[key] if key else FALLBACK
