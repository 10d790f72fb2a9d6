type BlockNumber = int
type ChainId = int
type Weight = int
