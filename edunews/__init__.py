"""
EduNews - cross-ledger article publishing

Mints an article NFT on AssetHub, records the signed article on EduChain and
reads both back together with the publisher's PeopleHub identity.
"""
__version__ = "0.1.0"
