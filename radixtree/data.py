"""
Helpers to turn text corpora into byte-string keys for the index.

Corpora come from a .json list of strings, a .txt file with one example per
line, or a dataset on the Hugging Face hub. Words are split out with the
pre-tokenizer of a Hugging Face tokenizer and encoded as UTF-8 keys.
Running this module downloads the NKJP1M corpus (https://huggingface.co/datasets/ipipan/nlprepl)
and saves it as json for later use by the CLI.
"""

import json
import os
from collections import Counter
from datasets import load_dataset
from tqdm import tqdm
from typing import Any, Dict, Iterable, List, Optional


def load_hf_corpus(
    name: str,
    config: Optional[str] = None,
    splits: Iterable[str] = ("train",),
    feature_name: str = "text",
    num_examples: Optional[int] = None
) -> List[str]:
    """
    Load text examples from a dataset on the Hugging Face hub.

    Args:
        name (str): Dataset name, e.g. "ipipan/nlprepl".
        config (Optional[str]): Dataset configuration name.
        splits (Iterable[str]): Splits to combine, in order.
        feature_name (str): The column holding the text, examples without it are skipped.
        num_examples (Optional[int]): Maximum number of examples to include.

    Returns:
        List[str]: The text examples.
    """
    corpus: List[str] = []
    for split in splits:
        # Splits are loaded lazily, the remaining ones are skipped once the limit is hit
        for example in load_dataset(name, name=config, split=split):
            text = example.get(feature_name)
            if text is None:
                continue
            corpus.append(text)
            if num_examples is not None and len(corpus) >= num_examples:
                return corpus
    return corpus


def load_corpus(path: str) -> List[str]:
    """
    Read a corpus from disk.

    Args:
        path (str): A .json file holding a list of strings, or a .txt file with one example per line.

    Returns:
        List[str]: The examples, blank lines skipped for .txt files.
    """
    extension = os.path.splitext(path)[1].lower()
    if extension == ".json":
        with open(path, "r", encoding="utf-8") as f:
            corpus = json.load(f)
        if not isinstance(corpus, list) or not all(isinstance(example, str) for example in corpus):
            raise TypeError("Corpus must be a list of strings.")
        return corpus
    if extension == ".txt":
        with open(path, "r", encoding="utf-8") as f:
            return [line.strip() for line in f if line.strip()]
    raise ValueError(f"Unsupported corpus file: {path} (expected .json or .txt)")


def extract_words(corpus: List[str], tokenizer: Any) -> Counter:
    """
    Count the words of a corpus.

    Args:
        corpus (List[str]): A list of sentences.
        tokenizer (PreTrainedTokenizerFast): A Hugging Face tokenizer whose pre-tokenizer splits the words.

    Returns:
        Counter: Word frequencies over the lowercased corpus.
    """
    if not isinstance(corpus, list) or not all(isinstance(example, str) for example in corpus):
        raise TypeError("Corpus must be a list of strings.")

    pre_tokenizer = tokenizer.backend_tokenizer.pre_tokenizer
    counts: Counter = Counter()
    for example in corpus:
        counts.update(word for word, _ in pre_tokenizer.pre_tokenize_str(example.lower()))
    return counts


def build_keys(word_counts: Dict[str, int]) -> Dict[bytes, int]:
    """Encode words as UTF-8 keys, keeping their counts."""
    return {word.encode("utf-8"): count for word, count in word_counts.items()}


def build_index(index: Any, keys: Dict[bytes, Any], verbose: bool = False) -> Any:
    """
    Insert every key with its value into `index`.

    Args:
        index (RadixTree | NaiveIndex): An empty or partially filled index.
        keys (Dict[bytes, Any]): Keys and the values to store.
        verbose (bool): Show a progress bar.

    Returns:
        The filled index.
    """
    for key, value in tqdm(keys.items(), total=len(keys), desc="Building index", disable=not verbose):
        index.insert(key, value)
    return index


def save_corpus(corpus: List[str], path: str) -> None:
    """Write a corpus as a .json list of strings, creating the parent directory."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(corpus, f, ensure_ascii=False, indent=2)


def main() -> None:
    corpus = load_hf_corpus(
        "ipipan/nlprepl",
        config="by_name-nkjp-conllu",
        splits=["train", "test", "validation"],
        num_examples=5000
    )
    if not corpus:
        print("No data loaded.")
        return
    output_path = "data/nkjp-5000.json"
    save_corpus(corpus, output_path)
    print(f"Saved {len(corpus)} examples to {output_path}")


if __name__ == "__main__":
    main()
