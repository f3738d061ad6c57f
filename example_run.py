from scenario import ScenarioInputs, advise, breakdown, evaluate, to_dataframe
from sweep import sweep

inputs = ScenarioInputs(
    revenue=5_000_000.0,  # 50 lakhs
    fixed_expenses=1_000_000.0,
    flexible_expenses=500_000.0,
    headcount=2,
    salary_per_head=1_200_000.0,
)


def main(csv_path: str = "example_output.csv"):
    result = evaluate(inputs)
    print(to_dataframe([result]).T.to_string(header=False))
    print(f"\nEfficiency: {result.efficiency_pct:.1f}%")
    for name, value in breakdown(inputs, result).items():
        print(f"{name:>14}: {value:,.0f}")
    print(advise(inputs).message)

    matrix = sweep(inputs.revenue, inputs.fixed_expenses, inputs.flexible_expenses)
    df = matrix.to_dataframe()
    df.to_csv(csv_path)
    print((df / 100_000).round(1).to_string())

    best = matrix.best()
    print(
        f"\nBest: {best.headcount} members at {best.salary_per_head:,.0f} "
        f"-> {best.total_retained:,.0f}"
    )
    return matrix


if __name__ == "__main__":
    main()
