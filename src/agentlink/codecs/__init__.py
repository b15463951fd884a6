"""Codec subpackage — imports trigger @register_agent decorators."""

from agentlink.codecs.pandabuy import PandabuyCodec  # noqa: F401
from agentlink.codecs.superbuy import AllChinaBuyCodec, SuperbuyCodec, WegobuyCodec  # noqa: F401
from agentlink.codecs.sugargoo import SugargooCodec  # noqa: F401
from agentlink.codecs.embedded import (  # noqa: F401
    BlikbuyCodec,
    EastmallbuyCodec,
    EzbuyCnCodec,
    HagobuyCodec,
    HegobuyCodec,
    HubbuyCnCodec,
    KameymallCodec,
    LoongbuyCodec,
)
from agentlink.codecs.cnfans import CnFansCodec, JoyabuyCodec, MulebuyCodec, OrientdigCodec  # noqa: F401
from agentlink.codecs.path_based import BasetaoCodec, CssbuyCodec, HoobuyCodec, OopbuyCodec  # noqa: F401
from agentlink.codecs.query_based import (  # noqa: F401
    AcbuyCodec,
    LovegobuyCodec,
    PanGlobalBuyCodec,
    PonybuyCodec,
    SifubuyCodec,
)
