"""
Test support: a hand-tagged corpus, a dictionary synthesizer, and a
reference exact matcher used to replay rules against the corpus.
"""
