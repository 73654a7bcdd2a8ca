# examples/star_registry_demo.py
# Run with: python examples/star_registry_demo.py

from dataclasses import replace

from starledger import ChainValidator, StarRegistry, WalletKeyPair
from starledger.core.encoding import encode_body


# =============================================================================
# DEMO
# =============================================================================

if __name__ == "__main__":
    registry = StarRegistry()
    alice = WalletKeyPair.generate()
    bob = WalletKeyPair.generate()

    # Ownership proof → star registration
    print("\n[Registering stars...]")
    for wallet, story in [(alice, "Found it on a clear night"), (bob, "Named after my cat"), (alice, "Second one")]:
        message = registry.request_message_ownership_verification(wallet.address)
        block = registry.submit_star(
            wallet.address,
            message,
            wallet.sign(message),
            {"dec": "68° 52' 56.9", "ra": "16h 29m 1.0s", "story": story},
        )
        print(f"  height={block.height} owner={wallet.address[:10]}... hash={block.hash[:12]}...")

    # Show chain
    print("\n[Chain]")
    chain = registry.chain.snapshot()
    for block in chain:
        hash_preview = block.previous_block_hash[:12] + "..." if block.previous_block_hash else "(genesis)"
        print(f"  [{block.height}] {hash_preview} | {block.decode_body()}")

    print(f"\n[Alice owns {len(registry.get_stars_by_wallet_address(alice.address))} stars]")

    # Validate
    print("\n[Validation]")
    print(f"  {registry.validation_report()}")

    # Tamper detection
    print("\n[Tamper detection]")
    tampered = chain.copy()
    tampered[1] = replace(tampered[1], body=encode_body({"owner": bob.address, "star": {"story": "stolen"}}))
    print(f"  {ChainValidator().verify(tampered)}")

    print("\n" + "=" * 60)
