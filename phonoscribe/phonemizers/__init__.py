from .phonemizer import Phonemizer
