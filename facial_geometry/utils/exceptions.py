"""커스텀 예외 클래스 정의"""


class FacialGeometryException(Exception):
    """기본 예외 클래스"""
    pass


class DetectionError(FacialGeometryException):
    """얼굴 검출기 실행 실패 예외 (얼굴 미검출은 예외가 아님)"""
    pass


class InvalidImageError(FacialGeometryException):
    """잘못된 이미지 입력 예외"""
    pass


class ConfigurationError(FacialGeometryException):
    """설정 오류 예외"""
    pass


class LandmarkExtractionError(FacialGeometryException):
    """랜드마크 추출 실패 예외"""
    pass


class InvalidColorError(FacialGeometryException):
    """메이크업 색상 형식 오류 예외"""
    pass
