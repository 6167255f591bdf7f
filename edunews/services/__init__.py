"""
Services - ledger access, signing and the registration / verification flows

Import from the submodules directly (services.article_service, ...).
"""
