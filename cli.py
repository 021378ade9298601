import argparse
from functools import partial
from argparse import RawTextHelpFormatter
from transformers import AutoTokenizer
from radixtree.tree import RadixTree
from radixtree.naive import NaiveIndex
from radixtree.data import load_corpus, load_hf_corpus, extract_words, build_keys, build_index
from radixtree.benchmarks import benchmarks


# Cleaner help display
MyFormatter = partial(RawTextHelpFormatter, max_help_position=70, width=100)

# Available indexes
INDEXES = {
    "RadixTree": RadixTree,
    "NaiveIndex": NaiveIndex
}


def show(label, result):
    value, found = result
    print(f"{label}: {value}" if found else f"{label}: not found")


# Defines the CLI
def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="cli.py",
        description=(
            "Radix Tree CLI\n\n"
            "A command-line tool to index the words of a corpus in a radix tree, query it and benchmark it.\n"
            "Each word is stored under its UTF-8 bytes with its frequency as value.\n"
        ),
        formatter_class=MyFormatter,
        epilog=(
            "Usage examples:\n\n"
            "Querying:\n"
            "  Exact lookup of a word:\n"
            "    python cli.py --corpus data/train.json --get kot\n"
            "  All words starting with a prefix:\n"
            "    python cli.py --corpus data/train.json --find prze\n"
            "  Longest indexed word that prefixes the input:\n"
            "    python cli.py --corpus data/train.json --longest_prefix kotlety\n"
            "  Neighbours of a word and the extremes:\n"
            "    python cli.py --corpus data/train.json --predecessor kot --successor kot --min --max\n"
            "  Remove a word before querying:\n"
            "    python cli.py --corpus data/train.txt --remove kot --get kot\n\n"
            "Hugging Face datasets:\n"
            "  Index the first 1000 examples of a hub dataset:\n"
            "    python cli.py --dataset ipipan/nlprepl --dataset_config by_name-nkjp-conllu --num_examples 1000 --min\n\n"
            "Benchmarking:\n"
            "  Benchmark the radix tree:\n"
            "    python cli.py --corpus data/train.json --benchmark\n"
            "  Compare against the naive index:\n"
            "    python cli.py --index RadixTree NaiveIndex --corpus data/train.json --benchmark\n"
            "  Only check that both indexes agree:\n"
            "    python cli.py --index RadixTree NaiveIndex --corpus data/train.json --benchmark --compare\n"
        )
    )

    # Selecting an index
    parser.add_argument(
        "-i", "--index",
        choices=INDEXES,
        nargs="+",
        metavar=("INDEX1", "INDEX2"),
        default=["RadixTree"],
        help=(
            "select primary index (default: RadixTree) and optional other indexes for comparison: "
            f"{', '.join(INDEXES.keys())}"
        )
    )

    # Select normalization model
    parser.add_argument(
        "--normalize_with",
        type=str,
        metavar="HF_TOKENIZER",
        default="bert-base-uncased",
        help="select HuggingFace tokenizer whose pre-tokenizer splits words (default: 'bert-base-uncased')"
    )

    # Corpus from disk
    parser.add_argument(
        "--corpus",
        type=str,
        metavar="PATH",
        help="path to .json list of strings or .txt file with one example per line"
    )

    # Corpus from the hub
    parser.add_argument(
        "--dataset",
        type=str,
        metavar="HF_DATASET",
        help="name of a HuggingFace dataset to index instead of --corpus"
    )
    parser.add_argument(
        "--dataset_config",
        type=str,
        metavar="NAME",
        help="configuration name of --dataset"
    )
    parser.add_argument(
        "--split",
        type=str,
        nargs="+",
        default=["train"],
        metavar="SPLIT",
        help="dataset splits to combine (default: train)"
    )
    parser.add_argument(
        "--feature",
        type=str,
        default="text",
        metavar="COLUMN",
        help="dataset column holding the text (default: 'text')"
    )
    parser.add_argument(
        "-n", "--num_examples",
        type=int,
        metavar="INTEGER",
        help="maximum number of dataset examples to index"
    )

    # Queries
    parser.add_argument("--remove", type=str, nargs="+", metavar="WORD", help="remove words before running queries")
    parser.add_argument("--get", type=str, metavar="WORD", help="frequency of WORD")
    parser.add_argument("--find", type=str, metavar="PREFIX", help="words starting with PREFIX with their frequencies")
    parser.add_argument("--longest_prefix", type=str, metavar="WORD", help="frequency of the longest indexed word prefixing WORD")
    parser.add_argument("--predecessor", type=str, metavar="WORD", help="frequency of the word right before WORD")
    parser.add_argument("--successor", type=str, metavar="WORD", help="frequency of the word right after WORD")
    parser.add_argument("--min", action="store_true", help="frequency of the smallest word")
    parser.add_argument("--max", action="store_true", help="frequency of the largest word")

    # Benchmark indexes
    parser.add_argument(
        "-b", "--benchmark",
        action="store_true",
        help="benchmark the selected index(es) on the corpus words"
    )
    parser.add_argument(
        "-c", "--compare",
        action="store_true",
        help="with --benchmark, only check that the selected indexes return the same results"
    )
    parser.add_argument(
        "--prefix_length",
        type=int,
        default=2,
        metavar="INTEGER",
        help="length of the prefixes used by the prefix search benchmark (default: 2)"
    )

    # Store the arguments so that we can use them
    args = parser.parse_args(argv)

    if bool(args.corpus) == bool(args.dataset):
        parser.error("exactly one of --corpus or --dataset is required")
    if args.compare and not args.benchmark:
        parser.error("--compare may only be used with --benchmark")
    if args.compare and len(args.index) < 2:
        parser.error("--compare requires at least two indexes")


    # LOAD CORPUS
    if args.corpus:
        corpus = load_corpus(args.corpus)
    else:
        corpus = load_hf_corpus(
            args.dataset,
            config=args.dataset_config,
            splits=args.split,
            feature_name=args.feature,
            num_examples=args.num_examples
        )
    print(f"Loaded {len(corpus)} examples")

    # Load the HF tokenizer used for word splitting
    hf_tokenizer = AutoTokenizer.from_pretrained(args.normalize_with)
    keys = build_keys(extract_words(corpus, hf_tokenizer))
    print(f"Extracted {len(keys)} distinct words")


    # BENCHMARKING
    if args.benchmark:
        factories = [INDEXES[name] for name in args.index]
        print(f"Benchmarking {' vs '.join(args.index)} on {len(keys)} keys...")
        benchmarks(
            index_factory=factories[0],
            keys=keys,
            prefix_length=args.prefix_length,
            reference_factories=factories[1:],
            compare_only=args.compare
        )
        print()
        return


    # BUILD INDEX
    index = build_index(INDEXES[args.index[0]](), keys, verbose=True)
    print(f"Indexed {len(index)} words in {args.index[0]}")

    # Queries run on lowercased words, like the corpus
    def encode(word):
        return word.lower().encode("utf-8")

    if args.remove:
        for word in args.remove:
            show(f"Removed {word}", index.remove(encode(word)))

    if args.get is not None:
        show(f"Get {args.get}", index.get(encode(args.get)))

    if args.find is not None:
        items = index.items(encode(args.find))
        print(f"=== {len(items)} words starting with '{args.find}' ===")
        for key, value in items:
            print(f"{key.decode('utf-8', errors='replace')}\t{value}")

    if args.longest_prefix is not None:
        show(f"Longest prefix of {args.longest_prefix}", index.longest_prefix(encode(args.longest_prefix)))

    if args.predecessor is not None:
        show(f"Predecessor of {args.predecessor}", index.predecessor(encode(args.predecessor)))

    if args.successor is not None:
        show(f"Successor of {args.successor}", index.successor(encode(args.successor)))

    if args.min:
        show("Min", index.min())

    if args.max:
        show("Max", index.max())


# Runs the CLI
if __name__ == "__main__":
    main()
