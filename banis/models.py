# banis/models.py
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class BaniCategory(str, Enum):
    SARV_GRANTH = "sarvGranth"
    NITNEM = "nitnem"
    DASAM = "dasam"
    RAAG = "raag"

    @property
    def display_title(self) -> str:
        return _CATEGORY_TITLES[self]


_CATEGORY_TITLES = {
    BaniCategory.SARV_GRANTH: "ਸਰਵ ਗ੍ਰੰਥ",
    BaniCategory.NITNEM: "ਨਿਤਨੇਮ",
    BaniCategory.DASAM: "ਦਸਮ ਦਰਬਾਰ",
    BaniCategory.RAAG: "ਰਾਗ ਦਰਬਾਰ",
}


class BaniType(str, Enum):
    """Catalog of readable Banis. The value doubles as the cache key."""

    JAPJI_SAHIB = "japjiSahib"
    JAAP_SAHIB = "jaapSahib"
    TAV_PRASAD_SAVAIYE = "tavPrasadSavaiye"
    CHAUPAI_SAHIB = "chaupaiSahib"
    ANAND_SAHIB = "anandSahib"
    REHRAS_SAHIB = "rehrasSahib"
    KIRTAN_SOHILA = "kirtanSohila"
    SUKHMANI_SAHIB = "sukhmaniSahib"
    SHABAD_HAZARE_P10 = "shabadHazareP10"
    SVAIYE_DEENAN = "svaiyeDeenan"
    CHANDI_DI_VAAR = "chandiDiVaar"
    ARDAAS = "ardaas"
    AARTI = "aarti"
    ASA_DI_VAAR = "asaDiVaar"
    DAKHNI_OANKAR = "dakhniOankar"
    SIDH_GOSHT = "sidhGosht"
    BAVAN_AKHREE = "bavanAkhree"
    JAITSREE_VAAR = "jaitsreeVaar"
    RAMKALI_VAAR = "ramkaliVaar"
    BASANT_VAAR = "basantVaar"
    BAAREH_MAAHA_TUKHARI = "baarehMaahaTukhari"
    SALOK_MAHALLA_9 = "salokMahalla9"
    RAAGMALA = "raagmala"
    # Complete Granths ship as bundled PDFs and are never fetched or cached
    GURU_GRANTH_SAHIB_JI = "guruGranthSahibJi"
    DASAM_GRANTH = "dasamGranth"
    SARBLOH_GRANTH = "sarblohGranth"

    @property
    def numeric_id(self) -> int:
        """BaniDB identifier, -1 when the API does not serve this Bani."""
        return _NUMERIC_IDS.get(self, -1)

    @property
    def display_title(self) -> str:
        return _DISPLAY_TITLES.get(self, " ")

    @property
    def category(self) -> BaniCategory:
        return _CATEGORIES[self]

    @property
    def is_bundled_pdf(self) -> bool:
        return self.category is BaniCategory.SARV_GRANTH

    @property
    def is_fetchable(self) -> bool:
        return not self.is_bundled_pdf and self.numeric_id > 0

    @classmethod
    def fetchable(cls) -> List["BaniType"]:
        return [bani_type for bani_type in cls if bani_type.is_fetchable]

    @classmethod
    def from_name(cls, text: str) -> "BaniType":
        """Look up by cache key ('japjiSahib'), enum name ('JAPJI_SAHIB') or any casing of either."""
        wanted = text.strip().replace("-", "_").lower()
        for bani_type in cls:
            if wanted in (bani_type.value.lower(), bani_type.name.lower()):
                return bani_type
        choices = ", ".join(bani_type.value for bani_type in cls)
        raise ValueError(f"Unknown bani '{text}'. Choose one of: {choices}")


_NUMERIC_IDS = {
    BaniType.JAPJI_SAHIB: 2,
    BaniType.JAAP_SAHIB: 4,
    BaniType.TAV_PRASAD_SAVAIYE: 6,
    BaniType.CHAUPAI_SAHIB: 9,
    BaniType.ANAND_SAHIB: 10,
    BaniType.REHRAS_SAHIB: 21,
    BaniType.KIRTAN_SOHILA: 23,
    BaniType.SUKHMANI_SAHIB: 31,
    BaniType.SHABAD_HAZARE_P10: 5,
    BaniType.SVAIYE_DEENAN: 7,
    BaniType.CHANDI_DI_VAAR: 13,
    BaniType.ARDAAS: 24,
    BaniType.AARTI: 22,
    BaniType.ASA_DI_VAAR: 90,
    BaniType.DAKHNI_OANKAR: 35,
    BaniType.SIDH_GOSHT: 34,
    BaniType.BAVAN_AKHREE: 33,
    BaniType.JAITSREE_VAAR: 96,
    BaniType.RAMKALI_VAAR: 100,
    BaniType.BASANT_VAAR: 104,
    BaniType.BAAREH_MAAHA_TUKHARI: 28,
    BaniType.SALOK_MAHALLA_9: 30,
    BaniType.RAAGMALA: 38,
}

_DISPLAY_TITLES = {
    BaniType.JAPJI_SAHIB: "ਜਪੁਜੀ ਸਾਹਿਬ",
    BaniType.JAAP_SAHIB: "ਜਾਪੁ ਸਾਹਿਬ",
    BaniType.TAV_PRASAD_SAVAIYE: "ਤ੍ਵ ਪ੍ਰਸਾਦਿ ਸਵੱਯੇ",
    BaniType.CHAUPAI_SAHIB: "ਬੇਨਤੀ ਚੌਪਈ ਸਾਹਿਬ",
    BaniType.ANAND_SAHIB: "ਆਨੰਦ ਸਾਹਿਬ",
    BaniType.REHRAS_SAHIB: "ਰਹਰਾਸਿ ਸਾਹਿਬ",
    BaniType.KIRTAN_SOHILA: "ਕੀਰਤਨ ਸੋਹਿਲਾ",
    BaniType.SUKHMANI_SAHIB: "ਸੁਖਮਨੀ ਸਾਹਿਬ",
    BaniType.SHABAD_HAZARE_P10: "ਸ਼ਬਦ ਹਜ਼ਾਰੇ ਪਾ: ੧੦",
    BaniType.SVAIYE_DEENAN: "ਸਵੈਯੇ ਦੀਨਨ ਕੇ",
    BaniType.CHANDI_DI_VAAR: "ਚੰਡੀ ਦੀ ਵਾਰ",
    BaniType.ARDAAS: "ਅਰਦਾਸ",
    BaniType.AARTI: "ਆਰਤੀ-ਆਰਤਾ",
    BaniType.ASA_DI_VAAR: "ਆਸਾ ਦੀ ਵਾਰ",
    BaniType.DAKHNI_OANKAR: "ਦਖਣੀ ਓਅੰਕਾਰ",
    BaniType.SIDH_GOSHT: "ਸਿਧ ਗੋਸਟ",
    BaniType.BAVAN_AKHREE: "ਬਾਵਨ ਅਖਰੀ",
    BaniType.JAITSREE_VAAR: "ਜੈਤਸਰੀ ਕੀ ਵਾਰ",
    BaniType.RAMKALI_VAAR: "ਰਾਮਕਲੀ ਕੀ ਵਾਰ",
    BaniType.BASANT_VAAR: "ਬਸੰਤ ਕੀ ਵਾਰ",
    BaniType.BAAREH_MAAHA_TUKHARI: "ਬਾਰਹ ਮਾਹਾ ਤੁਖਾਰੀ",
    BaniType.SALOK_MAHALLA_9: "ਸਲੋਕ ਮਹਲਾ ੯",
    BaniType.RAAGMALA: "ਰਾਗਮਾਲਾ",
    BaniType.GURU_GRANTH_SAHIB_JI: "ਗੁਰੂ ਗ੍ਰੰਥ ਸਾਹਿਬ ਜੀ",
    BaniType.DASAM_GRANTH: "ਦਸਮ ਗ੍ਰੰਥ ਸਾਹਿਬ ਜੀ",
    BaniType.SARBLOH_GRANTH: "ਸਰਬਲੋਹ ਗ੍ਰੰਥ ਜੀ",
}

_CATEGORIES = {
    **dict.fromkeys(
        [
            BaniType.JAPJI_SAHIB, BaniType.JAAP_SAHIB, BaniType.TAV_PRASAD_SAVAIYE,
            BaniType.CHAUPAI_SAHIB, BaniType.ANAND_SAHIB, BaniType.REHRAS_SAHIB,
            BaniType.KIRTAN_SOHILA, BaniType.SUKHMANI_SAHIB,
        ],
        BaniCategory.NITNEM,
    ),
    **dict.fromkeys(
        [
            BaniType.SHABAD_HAZARE_P10, BaniType.SVAIYE_DEENAN, BaniType.CHANDI_DI_VAAR,
            BaniType.ARDAAS, BaniType.AARTI,
        ],
        BaniCategory.DASAM,
    ),
    **dict.fromkeys(
        [
            BaniType.ASA_DI_VAAR, BaniType.DAKHNI_OANKAR, BaniType.SIDH_GOSHT,
            BaniType.BAVAN_AKHREE, BaniType.JAITSREE_VAAR, BaniType.RAMKALI_VAAR,
            BaniType.BASANT_VAAR, BaniType.BAAREH_MAAHA_TUKHARI, BaniType.SALOK_MAHALLA_9,
            BaniType.RAAGMALA,
        ],
        BaniCategory.RAAG,
    ),
    **dict.fromkeys(
        [BaniType.GURU_GRANTH_SAHIB_JI, BaniType.DASAM_GRANTH, BaniType.SARBLOH_GRANTH],
        BaniCategory.SARV_GRANTH,
    ),
}


class BaniLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    line: str                                # Gurmukhi text, never filled from a fallback
    translation: Optional[str] = None        # English translation
    hindi_translation: Optional[str] = None  # Hindi translation, or Devanagari transliteration

    @property
    def has_hindi(self) -> bool:
        return bool(self.hindi_translation)


class Bani(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    lines: Tuple[BaniLine, ...] = ()  # source order is reading order

    @property
    def has_any_hindi(self) -> bool:
        return any(line.has_hindi for line in self.lines)
