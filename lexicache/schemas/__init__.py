from lexicache.schemas.i18n import LocaleData, LocaleUpdate, TranslationData

__all__ = ["LocaleData", "LocaleUpdate", "TranslationData"]
