"""
스킨케어 프로필-제품 매칭 서비스
"""
from matchcare.shared.constants import SYSTEM_VERSION

__version__ = SYSTEM_VERSION
