import string
from collections.abc import Mapping

import numpy as np

ALPHABET = string.ascii_lowercase
LETTERS = frozenset(ALPHABET)


class InvalidWordError(ValueError):
    pass


def letter_counts(letters):
    """
    Count how many of each lowercase letter is in `letters`.

    `letters` is a string (or any sequence of characters), or a mapping of letter to count such as a Counter.
    Returns an array of 26 ints, index 0 for 'a' through 25 for 'z'. Anything that isn't a-z (uppercase
    included) is left out rather than folded.
    """
    if isinstance(letters, Mapping):
        letters = [l for l, n in letters.items() for _ in range(n)]

    codes = np.array([ord(l) for l in letters if len(l) == 1], dtype=int)
    codes = codes[(codes >= ord('a')) & (codes <= ord('z'))]
    return np.bincount(codes - ord('a'), minlength=len(ALPHABET))


class Node:

    __slots__ = ['letter', 'is_word', 'branches', 'parent']

    def __init__(self, letter, parent=None):
        self.letter = letter
        self.is_word = False
        self.branches = {}
        self.parent = parent

    @property
    def index(self):
        return ord(self.letter) - ord('a')

    def get(self, value):
        return self.branches.get(value)

    def child(self, letter):
        node = self.branches.get(letter)
        if node is None:
            node = self.branches[letter] = Node(letter, parent=self)
        return node

    def __getitem__(self, key):
        return self.branches[key]

    def __repr__(self):
        return f"<Node {self.letter} ({self.is_word})>"

    def __contains__(self, value):
        return value in self.branches

    def __iter__(self):
        return iter(self.branches.values())


class WordMatch:
    """
    A word found by a search, held as the node it ends on.
    """

    __slots__ = ['node']

    def __init__(self, node):
        self.node = node

    @property
    def word(self):
        letters = []
        node = self.node
        while node is not None:
            letters.append(node.letter)
            node = node.parent
        return ''.join(reversed(letters))

    def __len__(self):
        return len(self.word)

    def __str__(self):
        return self.word

    def __repr__(self):
        return f"<WordMatch {self.word}>"

    def __eq__(self, other):
        if isinstance(other, WordMatch):
            return self.node is other.node
        return NotImplemented

    def __hash__(self):
        return id(self.node)


class WordTree:
    """
    One tree per starting letter, all 26 always present.

    Once built the tree is only read, so a single instance can answer any number of queries.
    """

    def __init__(self, words=()):
        self.tree = {l: Node(l) for l in ALPHABET}
        self.size = 0
        self.build_tree(words)

    def build_tree(self, words):
        for word in words:
            self.insert(word)
        return self

    def insert(self, word):
        if not isinstance(word, str) or not word or not LETTERS.issuperset(word):
            raise InvalidWordError(f"Can't add {word!r}, words must be non-empty and only use letters a-z")

        branch = self.tree[word[0]]
        for l in word[1:]:
            branch = branch.child(l)

        if branch.is_word:
            return False

        branch.is_word = True
        self.size += 1
        return True

    def find_all_words(self, letters):
        """
        Find every word that can be spelt from `letters`, using each letter at most as many times as it appears.

        Words come out in the order the search reaches them: starting letters a to z, then each node's children
        in the order they were first inserted. Nothing is sorted.
        """
        available = letter_counts(letters)
        found = []

        def visit(node):
            if node.is_word:
                found.append(WordMatch(node))

            for child in node:
                i = child.index
                if available[i] > 0:
                    available[i] -= 1
                    visit(child)
                    available[i] += 1

        for i, l in enumerate(ALPHABET):
            if available[i] > 0:
                available[i] -= 1
                visit(self.tree[l])
                available[i] += 1

        return found

    def is_word(self, word):
        if not isinstance(word, str) or not word:
            return False

        p = self.tree.get(word[0])
        for l in word[1:]:
            if p is None:
                return False
            p = p.get(l)

        return p is not None and p.is_word

    def __contains__(self, word):
        return self.is_word(word)

    def __len__(self):
        return self.size

    def __repr__(self):
        return f"<WordTree ({self.size} words)>"


def build(words):
    return WordTree(words)


def find_all_words(tree, letters):
    return tree.find_all_words(letters)
