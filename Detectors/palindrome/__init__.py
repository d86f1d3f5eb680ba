"""
Palindrome Detection Subpackage

Modules:
--------
- detector: PalindromeDetector plus the odd/even radius helpers

Classes:
--------
- PalindromeDetector: Maximal odd- and even-length palindromes per centre
"""

from .detector import PalindromeDetector, odd_radii, even_radii

__all__ = ['PalindromeDetector', 'odd_radii', 'even_radii']
