#!/usr/bin/env python3

# WARNING: This implementation may contain bugs and has not been audited.
# It is only for educational purposes. DO NOT use it in production.

import argparse
import logging
import random
import sys

from pyschnorr.blind import RequesterSession, SignerSession
from pyschnorr.errors import ParameterSearchError, RandomnessError
from pyschnorr.group import DEFAULT_BIT_LENGTH, GROUP_KINDS, make_group
from pyschnorr.keys import derive
from pyschnorr.schnorr import sign, verify


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Schnorr signature and blind Schnorr signature demo.")
    p.add_argument("--group", choices=GROUP_KINDS, default="modular",
                   help="Group to work in (default: modular). 'integer' reproduces plain integer arithmetic and is NOT secure.")
    p.add_argument("--bits", type=int, default=DEFAULT_BIT_LENGTH,
                   help=f"Bit length of the group order (default {DEFAULT_BIT_LENGTH}, ignored for bn128).")
    p.add_argument("--message", type=str, default="hello", help="Message to sign (default 'hello').")
    p.add_argument("--seed", type=int, default=None, help="Seed for reproducible randomness (NOT secure).")
    p.add_argument("-v", "--verbose", action="store_true", help="Log protocol steps.")
    return p.parse_args(argv)


def run(args) -> bool:
    rng = None if args.seed is None else random.Random(args.seed)
    message = args.message

    params = make_group(args.group, args.bits, rng)
    print(f"Group: {params.name}, order={params.order}, generator={params.generator}")

    print("### Schnorr signature ###")
    print(f"Message to sign: {message}")

    sk, pk = derive(params, rng)
    signature = sign(message, sk, rng)
    print(f"Created signature: {signature}")

    if verify(message, signature, pk):
        print("Signature is valid. Schnorr signature algorithm is working!")
    else:
        print("Signature is invalid. Schnorr signature algorithm is not working!")
        return False

    print("### Blind Schnorr signature ###")
    signer = SignerSession(sk, rng)
    requester = RequesterSession(pk, message, rng)

    R = signer.commit()
    c = requester.blind(R)
    s = signer.respond(c)

    if requester.check_response(s):
        print("Signature received from Signer by User is valid!")
    else:
        print("Signature received from Signer by User is invalid!")
        requester.abort()
        return False

    blind_signature = requester.finalize(s)
    if verify(message, blind_signature, pk):
        print("Signature created by User is valid!")
        return True
    print("Signature created by User is invalid!")
    return False


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    try:
        run(args)
    except (RandomnessError, ParameterSearchError) as e:
        print(f"fatal: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
