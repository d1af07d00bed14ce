# ------------------------------------------------------------------
# Material presets with the additional values of all criteria:
# ------------------------------------------------------------------
from plyfailure.data_utils import ElasticProperties, MaterialStrengthProfile, StrengthProperties

CRITERION_DEFAULTS = {
    "chang_chang.beta": 0.5,
    "tsai_wu.beta": 0.5,
    "daimler_camanho.g1c": 0.28,  # N/mm
    "daimler_camanho.g2c": 0.79,  # N/mm
    "daimler_camanho.alpha0": 53.0,  # deg
    "daimler_pinho.alpha0": 53.0,  # deg
}

T700 = MaterialStrengthProfile(
    name="T700",
    elastic=ElasticProperties(E1=135000, E2=11200, G12=5000, v12=0.3),
    strength=StrengthProperties(R11t=2550, R11c=1470, Yt=69, Yc=300, S=100),
    additional_values=dict(CRITERION_DEFAULTS),
)
Christos = MaterialStrengthProfile(
    name="Christos",
    elastic=ElasticProperties(E1=142000, E2=11200, G12=5000, v12=0.3),
    strength=StrengthProperties(R11t=2200, R11c=1800, Yt=70, Yc=300, S=100),
    additional_values=dict(CRITERION_DEFAULTS),
)

MATERIALS: dict[str, MaterialStrengthProfile] = {m.name: m for m in (T700, Christos)}

DEFAULT_MATERIAL = T700
