"""
FastAPI server for the unit catalog.

Provides REST endpoints for unit lookups and conversions, plus a small
HTML converter page.
"""

from typing import Optional
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from unitcatalog import __version__
from unitcatalog.catalog.models import Conversion, Unit
from unitcatalog.errors import UnitNotFoundError
from unitcatalog.service import UnitService, get_unit_service

# Create FastAPI app
app = FastAPI(
    title="Unit Catalog API",
    description="""
    Lookup and conversion of physical units from a curated catalog.

    Units are addressed by externalId (e.g. `temperature:deg_c`), by
    quantity and alias, or by unit system.
    """,
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# HTML UI Template
HTML_UI = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Unit Catalog</title>
    <style>
        * { box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            max-width: 800px;
            margin: 0 auto;
            padding: 20px;
            background: #f5f5f5;
            color: #333;
        }
        h1 { color: #2c3e50; border-bottom: 3px solid #3498db; padding-bottom: 10px; }
        .card {
            background: white;
            padding: 20px;
            border-radius: 8px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }
        label { display: block; font-size: 12px; color: #666; margin-top: 10px; }
        input, select { width: 100%; padding: 8px; border: 1px solid #ddd; border-radius: 4px; }
        button {
            margin-top: 15px;
            padding: 12px 24px;
            font-size: 14px;
            cursor: pointer;
            border: none;
            border-radius: 4px;
            background: #3498db;
            color: white;
        }
        button:hover { background: #2980b9; }
        .result { margin-top: 20px; font-size: 20px; font-weight: bold; color: #27ae60; }
        .error { color: #e74c3c; }
    </style>
</head>
<body>
    <h1>Unit Catalog</h1>
    <div class="card">
        <label for="quantity">Quantity</label>
        <select id="quantity" onchange="loadUnits()"></select>
        <label for="from">From</label>
        <select id="from"></select>
        <label for="to">To</label>
        <select id="to"></select>
        <label for="value">Value</label>
        <input id="value" type="number" value="1" step="any">
        <button onclick="convert()">Convert</button>
        <div id="result" class="result"></div>
    </div>
    <script>
        async function loadQuantities() {
            const response = await fetch('/quantities');
            const data = await response.json();
            const select = document.getElementById('quantity');
            select.innerHTML = data.quantities.map(q => `<option>${q}</option>`).join('');
            await loadUnits();
        }

        async function loadUnits() {
            const quantity = document.getElementById('quantity').value;
            const response = await fetch(`/quantities/${encodeURIComponent(quantity)}/units`);
            const units = await response.json();
            const options = units.map(u => `<option value="${u.externalId}">${u.longName || u.name}</option>`).join('');
            document.getElementById('from').innerHTML = options;
            document.getElementById('to').innerHTML = options;
        }

        async function convert() {
            const resultDiv = document.getElementById('result');
            const body = {
                from: document.getElementById('from').value,
                to: document.getElementById('to').value,
                value: parseFloat(document.getElementById('value').value),
            };
            const response = await fetch('/convert', {
                method: 'POST',
                headers: {'Content-Type': 'application/json'},
                body: JSON.stringify(body),
            });
            const data = await response.json();
            if (!response.ok) {
                resultDiv.innerHTML = `<span class="error">${data.detail}</span>`;
                return;
            }
            resultDiv.textContent = `${data.value} ${data.from} = ${data.result} ${data.to}`;
        }

        loadQuantities();
    </script>
</body>
</html>
"""


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    unit_count: int


class ConvertRequest(BaseModel):
    """Request body for the convert endpoint."""
    from_unit: str = Field(..., alias="from", description="externalId of the source unit")
    to_unit: str = Field(..., alias="to", description="externalId of the target unit")
    value: float = Field(..., description="Value to convert")
    square_multiplier: bool = Field(
        default=False,
        description="Treat the value as a variance (squared unit); offsets are ignored",
    )

    model_config = {"populate_by_name": True}


class ConvertResponse(BaseModel):
    """Result of a conversion."""
    from_unit: str = Field(..., alias="from")
    to_unit: str = Field(..., alias="to")
    value: float
    result: float
    square_multiplier: bool

    model_config = {"populate_by_name": True}


class DuplicateGroup(BaseModel):
    """Units of one quantity sharing the same conversion."""
    quantity: str
    conversion: Conversion
    units: list[str]


def get_service() -> UnitService:
    """Service used by the endpoints (overridable in tests)."""
    return get_unit_service()


@app.exception_handler(UnitNotFoundError)
async def unit_not_found_handler(request: Request, exc: UnitNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.get("/", response_class=HTMLResponse)
async def root():
    """Serve the HTML UI."""
    return HTML_UI


@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check(service: UnitService = Depends(get_service)):
    """Check if the API is running."""
    return HealthResponse(status="healthy", version=__version__, unit_count=len(service.get_units()))


@app.get("/units", response_model=list[Unit], tags=["Units"])
async def list_units(
    quantity: Optional[str] = None,
    service: UnitService = Depends(get_service),
):
    """List all units, optionally restricted to one quantity."""
    if quantity is not None:
        return service.get_units_by_quantity(quantity)
    return service.get_units()


@app.get("/units/{external_id}", response_model=Unit, tags=["Units"])
async def get_unit(external_id: str, service: UnitService = Depends(get_service)):
    """Get a unit by externalId."""
    return service.get_unit_by_external_id(external_id)


@app.get("/units/{external_id}/systems/{system}", response_model=Unit, tags=["Unit Systems"])
async def get_unit_in_system(
    external_id: str,
    system: str,
    service: UnitService = Depends(get_service),
):
    """
    Get the counterpart of a unit in a unit system.

    Falls back to the Default system when the requested system does not
    cover the unit's quantity.
    """
    unit = service.get_unit_by_external_id(external_id)
    return service.get_unit_by_system(unit, system)


@app.get("/quantities", tags=["Quantities"])
async def list_quantities(service: UnitService = Depends(get_service)):
    """Get the list of quantities in the catalog."""
    return {"quantities": service.get_quantities()}


@app.get("/quantities/{quantity}/units", response_model=list[Unit], tags=["Quantities"])
async def get_quantity_units(quantity: str, service: UnitService = Depends(get_service)):
    """Get the units of a quantity in catalog order."""
    return service.get_units_by_quantity(quantity)


@app.get("/quantities/{quantity}/aliases/{alias:path}", response_model=Unit, tags=["Quantities"])
async def get_quantity_alias(quantity: str, alias: str, service: UnitService = Depends(get_service)):
    """Resolve an alias within a quantity."""
    return service.get_unit_by_quantity_and_alias(quantity, alias)


@app.get("/aliases/{alias:path}", response_model=list[Unit], tags=["Units"])
async def get_alias_units(alias: str, service: UnitService = Depends(get_service)):
    """Get all units (of any quantity) known by an alias."""
    return service.get_units_by_alias(alias)


@app.get("/unit-systems", tags=["Unit Systems"])
async def list_unit_systems(service: UnitService = Depends(get_service)):
    """Get the names of the unit systems."""
    return {"unit_systems": sorted(service.get_unit_systems())}


@app.post("/convert", response_model=ConvertResponse, tags=["Conversions"])
async def convert(request: ConvertRequest, service: UnitService = Depends(get_service)):
    """
    Convert a value between two units of the same quantity.

    With square_multiplier=true the value is treated as a variance and
    only the multipliers are applied.
    """
    from_unit = service.get_unit_by_external_id(request.from_unit)
    to_unit = service.get_unit_by_external_id(request.to_unit)

    if from_unit.quantity != to_unit.quantity:
        raise HTTPException(
            status_code=400,
            detail=f"Cannot convert between {from_unit.quantity} and {to_unit.quantity}",
        )

    if request.square_multiplier:
        result = service.convert_between_units_square_multiplier(from_unit, to_unit, request.value)
    else:
        result = service.convert_between_units(from_unit, to_unit, request.value)

    return ConvertResponse(
        from_unit=from_unit.external_id,
        to_unit=to_unit.external_id,
        value=request.value,
        result=result,
        square_multiplier=request.square_multiplier,
    )


@app.get("/duplicates", response_model=list[DuplicateGroup], tags=["Diagnostics"])
async def list_duplicates(service: UnitService = Depends(get_service)):
    """Get groups of units that share a conversion within a quantity."""
    duplicates = service.get_duplicate_conversions(service.get_units())
    return [
        DuplicateGroup(
            quantity=quantity,
            conversion=conversion,
            units=[unit.external_id for unit in units],
        )
        for quantity, groups in duplicates.items()
        for conversion, units in groups.items()
    ]
