import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

from .word_search import WordTree, InvalidWordError


class DictionaryError(Exception):
    pass


def iter_lines(source):
    if isinstance(source, (str, Path)):
        with open(source, encoding='utf-8', errors='replace') as f:
            yield from f
    else:
        yield from source


def read_words(source):
    """
    Lazily yields (line number, word) for each non-blank line of a word list. `source` is a path or any
    iterable of lines.
    """
    for lineno, line in enumerate(iter_lines(source), start=1):
        word = line.strip()
        if word:
            yield lineno, word


def load_tree(source, strict=False, on_skip=None):
    """
    Build a WordTree from a word list.

    Malformed lines are skipped (reported through on_skip(lineno, word, error) if given), unless strict,
    in which case the first one aborts the load with a DictionaryError.

    Returns the tree and the number of lines skipped.
    """
    tree = WordTree()
    skipped = 0
    for lineno, word in read_words(source):
        try:
            tree.insert(word)
        except InvalidWordError as e:
            if strict:
                raise DictionaryError(f"{source}, line {lineno}: {e}") from e
            skipped += 1
            if on_skip is not None:
                on_skip(lineno, word, e)
    return tree, skipped


def format_words(words, per_line=6):
    words = [str(w) for w in words]
    if not words:
        return ''

    padding = -len(words) % per_line
    grid = np.array(words + [''] * padding, dtype=object).reshape(-1, per_line)
    df = pd.DataFrame(data=grid)
    return df.to_string(index=False, header=False)


class Solver:
    """
    Loads a dictionary once, then answers queries of letters against it.

    Settings are class attributes, override them on a subclass or per instance with keyword arguments.
    """

    words_per_line = 6
    stop_word = 'STOP'
    strict = False
    sort_results = False

    settings = ('words_per_line', 'stop_word', 'strict', 'sort_results', 'prompt')

    prompt = "Enter a group of letters (uppercase letters will be ignored) ({stop} to stop): "

    def __init__(self, dictionary, **settings):
        for key, value in settings.items():
            if key not in self.settings:
                raise TypeError(f"Unknown setting {key!r}")
            setattr(self, key, value)

        print("Constructing word tree...")
        self.word_tree, self.skipped = load_tree(dictionary, strict=self.strict, on_skip=self._report_skip)
        print("Word tree successfully constructed.")
        print(f"{len(self.word_tree)} words loaded, {self.skipped} lines skipped")

    @staticmethod
    def _report_skip(lineno, word, error):
        print(f"Skipping line {lineno}: {error}")

    def solve(self, letters):
        words = [match.word for match in self.word_tree.find_all_words(letters)]
        if self.sort_results:
            words.sort()
        return words

    def show(self, words):
        print(f"{len(words)} words found:")
        grid = format_words(words, self.words_per_line)
        if grid:
            print(grid)

    def ask_letters(self):
        """
        Prompt for a line of letters, None once input runs out.
        """
        try:
            return input(self.prompt.format(stop=self.stop_word))
        except EOFError:
            return None

    def iter_queries(self):
        """
        Yields each whitespace separated group of letters typed in, up to the stop word.
        """
        while True:
            line = self.ask_letters()
            if line is None:
                return
            for letters in line.split():
                if letters == self.stop_word:
                    return
                yield letters

    def run_queries(self, queries):
        for letters in queries:
            self.show(self.solve(letters))

    def run(self):
        self.run_queries(self.iter_queries())


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='gridwords',
        description="Find every dictionary word that can be made from a collection of letters."
    )
    parser.add_argument('dictionary', help="Word list, one lowercase word per line.")
    parser.add_argument('-l', '--letters', action='append',
                        help="Letters to search with. Repeat for several queries; omit to be prompted.")
    parser.add_argument('--strict', action='store_true', help="Stop on the first malformed dictionary line.")
    parser.add_argument('--sort', action='store_true', help="Sort the words found alphabetically.")
    parser.add_argument('--per-line', type=int, default=Solver.words_per_line, help="Words printed per line.")

    args = parser.parse_args(argv)

    if args.per_line < 1:
        parser.error("--per-line must be at least 1")

    try:
        solver = Solver(args.dictionary, strict=args.strict, sort_results=args.sort,
                        words_per_line=args.per_line)
    except OSError as e:
        print(f"ERROR: Bad input file \"{args.dictionary}\": {e.strerror}", file=sys.stderr)
        return 1
    except DictionaryError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.letters:
        solver.run_queries(args.letters)
    else:
        solver.run()

    return 0
