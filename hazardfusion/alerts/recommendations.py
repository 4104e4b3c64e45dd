"""Safety recommendations attached to new alerts, keyed by hazard and severity."""

from __future__ import annotations

from typing import Dict, List

from hazardfusion.models.reports import HazardType, SeverityLevel

_H = HazardType
_S = SeverityLevel

_RECOMMENDATIONS: Dict[HazardType, Dict[SeverityLevel, List[str]]] = {
    _H.FLOODING: {
        _S.HIGH: [
            "Evacuate low-lying areas immediately",
            "Move to higher ground",
            "Avoid walking or driving through flood waters",
            "Contact emergency services if trapped",
        ],
        _S.MODERATE: [
            "Monitor water levels",
            "Prepare emergency supplies",
            "Avoid flood-prone areas",
            "Stay informed through official channels",
        ],
        _S.LOW: [
            "Be aware of rising water levels",
            "Avoid unnecessary travel in affected areas",
        ],
    },
    _H.STORM_SURGE: {
        _S.HIGH: [
            "Evacuate coastal areas immediately",
            "Move inland to higher ground",
            "Do not return until authorities declare safe",
        ],
        _S.MODERATE: [
            "Prepare for possible evacuation",
            "Secure loose outdoor items",
            "Stay away from beaches",
        ],
        _S.LOW: ["Monitor weather updates", "Avoid coastal areas during high tide"],
    },
    _H.HIGH_WAVES: {
        _S.HIGH: [
            "Stay away from beaches and coastal areas",
            "Do not attempt water activities",
            "Heed all warning signs",
        ],
        _S.MODERATE: [
            "Exercise caution near water",
            "Avoid swimming",
            "Keep children away from shoreline",
        ],
        _S.LOW: ["Be cautious near water", "Check conditions before water activities"],
    },
    _H.EROSION: {
        _S.HIGH: [
            "Evacuate cliff-top areas",
            "Stay away from eroding coastline",
            "Report any structural damage",
        ],
        _S.MODERATE: ["Avoid walking near cliff edges", "Monitor for signs of land movement"],
        _S.LOW: ["Be aware of unstable ground", "Report any visible erosion"],
    },
    _H.RIP_CURRENT: {
        _S.HIGH: [
            "Do not enter the water",
            "If caught, swim parallel to shore",
            "Signal for help if needed",
        ],
        _S.MODERATE: [
            "Swim only in designated areas",
            "Stay close to shore",
            "Swim with a buddy",
        ],
        _S.LOW: ["Be aware of current conditions", "Know how to escape rip currents"],
    },
    _H.TSUNAMI: {
        _S.HIGH: [
            "Move to high ground immediately",
            "Do not wait for official warning",
            "Stay away from coast until all-clear",
        ],
        _S.MODERATE: [
            "Be prepared to evacuate",
            "Know your evacuation route",
            "Monitor official channels",
        ],
        _S.LOW: ["Be aware of tsunami signs", "Know evacuation procedures"],
    },
    _H.POLLUTION: {
        _S.HIGH: [
            "Avoid contact with affected water",
            "Do not consume seafood from area",
            "Report to environmental authorities",
        ],
        _S.MODERATE: [
            "Limit exposure to affected areas",
            "Wash thoroughly after any contact",
        ],
        _S.LOW: ["Be aware of water quality", "Follow local advisories"],
    },
    _H.OTHER: {
        _S.HIGH: ["Follow official guidance", "Stay informed", "Prepare emergency supplies"],
        _S.MODERATE: ["Monitor situation", "Be prepared to act"],
        _S.LOW: ["Stay aware of conditions"],
    },
}


def generate_recommendations(hazard_type: HazardType, severity: SeverityLevel) -> List[str]:
    """Return a fresh list of safety actions for a hazard/severity pair."""
    by_severity = _RECOMMENDATIONS.get(HazardType(hazard_type), _RECOMMENDATIONS[_H.OTHER])
    return list(by_severity[SeverityLevel(severity)])
